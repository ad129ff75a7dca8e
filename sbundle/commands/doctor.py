"""
sbundle Doctor Command - Check dependencies and the staging environment
"""

import os
import sys
import tempfile

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from sbundle.constants import DEFAULT_TEMP_ROOT
from sbundle.core.validator import SCHEMA_DIR


def run_doctor(console: Console = None) -> bool:
    """Check system dependencies and configuration.

    Returns:
        True if all checks pass, False otherwise
    """
    console = console or Console()

    console.print()
    console.print(Panel(
        "[bold]System Diagnostics[/]",
        title="[cyan]sbundle Doctor[/]",
        border_style="cyan"
    ))
    console.print()

    all_passed = True

    table = Table(show_header=True, header_style="bold")
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Details", style="dim")

    py_version = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    py_ok = sys.version_info >= (3, 9)
    table.add_row(
        "Python version",
        "[green]✓[/]" if py_ok else "[red]✗[/]",
        f"{py_version} {'(OK)' if py_ok else '(need >=3.9)'}"
    )
    if not py_ok:
        all_passed = False

    packages = [
        ("click", "click", "CLI framework"),
        ("pyyaml", "yaml", "Build config and recipe files"),
        ("jsonschema", "jsonschema", "Descriptor validation"),
        ("rich", "rich", "Terminal output"),
    ]

    for pkg_name, module_name, description in packages:
        try:
            pkg = __import__(module_name)
            version = getattr(pkg, "__version__", "installed")
            table.add_row(pkg_name, "[green]✓[/]", f"{version} - {description}")
        except ImportError:
            table.add_row(pkg_name, "[red]✗[/]", f"Not installed - {description}")
            all_passed = False

    schema_path = SCHEMA_DIR / "bundle.schema.json"
    if schema_path.exists():
        table.add_row("bundle schema", "[green]✓[/]", str(schema_path))
    else:
        table.add_row("bundle schema", "[red]✗[/]", "Not found")
        all_passed = False

    temp_root = DEFAULT_TEMP_ROOT or tempfile.gettempdir()
    if os.path.isdir(temp_root) and os.access(temp_root, os.W_OK | os.X_OK):
        table.add_row("Temp root", "[green]✓[/]", f"{temp_root} (writable)")
    else:
        table.add_row("Temp root", "[red]✗[/]", f"{temp_root} (missing or not writable)")
        all_passed = False

    console.print(table)
    console.print()

    if all_passed:
        console.print("[bold green]✓ All required checks passed![/]")
    else:
        console.print("[bold red]✗ Some checks failed[/]")
        console.print()
        console.print("To install missing packages:")
        console.print("  [cyan]pip install sbundle[/]")
        console.print("  or")
        console.print("  [cyan]pip install -e .[/] (for development)")

    console.print()
    return all_passed
