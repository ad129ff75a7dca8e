"""
sbundle Validate Command - Validate a bundle descriptor against its schema
"""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from sbundle.core.validator import BundleValidator, Severity


def run_validate(
    descriptor_path: Path,
    verbose: bool = False,
    strict: bool = False,
    output_format: str = "text",
    console: Console = None
) -> bool:
    """Run validation on a bundle descriptor.

    Args:
        descriptor_path: Path to the descriptor JSON
        verbose: Show detailed output
        strict: Treat warnings as errors
        output_format: Output format (text or json)
        console: Rich console for output

    Returns:
        True if validation passed, False otherwise
    """
    console = console or Console()

    validator = BundleValidator()
    result = validator.validate_file(descriptor_path)
    passed = result.is_valid and (not strict or not result.has_warnings)

    if output_format == "json":
        console.print_json(data=result.to_dict())
        return passed

    console.print()
    console.print(Panel(
        f"[bold]Validating:[/] {descriptor_path}",
        title="[cyan]Bundle Validation[/]",
        border_style="cyan"
    ))
    console.print()

    if not result.issues:
        console.print("[bold green]✓ All validations passed![/]")
        return True

    for issue in result.issues:
        severity_style = {
            Severity.ERROR: "red",
            Severity.WARNING: "yellow",
            Severity.INFO: "blue",
        }.get(issue.severity, "white")

        console.print(f"  [{severity_style}][{issue.severity.value.upper()}][/] {issue.message}")

        if verbose:
            if issue.json_path:
                console.print(f"    [dim]Path: {issue.json_path}[/]")
            if issue.suggestion:
                console.print(f"    [green]Suggestion: {issue.suggestion}[/]")

    console.print()

    table = Table(title="Summary", show_header=False, box=None)
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Errors:", f"[red]{result.error_count}[/]")
    table.add_row("Warnings:", f"[yellow]{result.warning_count}[/]")
    console.print(table)

    if passed:
        console.print("\n[bold green]✓ Validation passed[/]")
    else:
        console.print("\n[bold red]✗ Validation failed[/]")

    return passed
