"""
sbundle Info Command - Display a bundle descriptor
"""

from pathlib import Path

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from sbundle.constants import KNOWN_SECTIONS
from sbundle.core.bundle import Bundle
from sbundle.core.errors import BundleFormatError


def run_info(
    descriptor_path: Path,
    output_format: str = "text",
    console: Console = None
) -> bool:
    """Display information about a bundle.

    Args:
        descriptor_path: Path to the bundle descriptor JSON
        output_format: Output format (text, json, or yaml)
        console: Rich console for output

    Returns:
        True if successful, False otherwise
    """
    console = console or Console()

    try:
        bundle = Bundle.load(descriptor_path)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/] {e}")
        return False
    except BundleFormatError as e:
        console.print(f"[red]Error loading bundle:[/] {e}")
        return False

    if output_format == "json":
        console.print_json(data=bundle.to_dict())
        return True

    if output_format == "yaml":
        console.print(
            yaml.safe_dump(bundle.to_dict(), default_flow_style=False, sort_keys=False),
            markup=False
        )
        return True

    console.print()
    console.print(Panel(
        f"[bold]{bundle.path}[/]",
        title="[cyan]Build Bundle[/]",
        border_style="cyan"
    ))
    console.print()

    tree = Tree("[bold cyan]Filesystem objects[/]")
    for label, relpath in sorted(bundle.fs_objects.items()):
        exists = Path(bundle.resolve(label)).is_dir()
        marker = "[green]✓[/]" if exists else "[yellow]○[/]"
        tree.add(f"{marker} {label} → {relpath}")
    console.print(tree)
    console.print()

    if bundle.metadata:
        meta = Table(title="Metadata objects", show_header=True, header_style="bold")
        meta.add_column("Key", style="cyan")
        meta.add_column("Size", justify="right")
        for key, blob in sorted(bundle.metadata.items()):
            meta.add_row(key, f"{len(blob):,} bytes")
        console.print(meta)
        console.print()

    table = Table(show_header=False, box=None)
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Recipe:", "[green]present[/]" if bundle.recipe is not None else "[dim]none[/]")
    table.add_row("Bind paths:", ", ".join(bundle.bind_paths) or "[dim]none[/]")
    table.add_row("Sections:", ", ".join(bundle.sections) or "[dim]none[/]")
    table.add_row("Force:", str(bundle.force))
    table.add_row("Update:", str(bundle.update))
    table.add_row("No test:", str(bundle.no_test))
    console.print(table)
    console.print()

    phases = [name for name in sorted(KNOWN_SECTIONS) if bundle.run_section(name)]
    console.print(f"[bold]Phases that will run:[/] {', '.join(phases) or '[dim]none[/]'}")
    console.print()
    return True
