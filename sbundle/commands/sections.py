"""
sbundle Should-Run Command - Ask the section gate whether a phase executes
"""

from pathlib import Path

from rich.console import Console

from sbundle.core.bundle import Bundle
from sbundle.core.errors import BundleFormatError


def run_should_run(
    descriptor_path: Path,
    section: str,
    quiet: bool = False,
    console: Console = None
) -> bool:
    """Return True if ``section`` runs for the bundle's section list.

    A descriptor that cannot be loaded counts as "does not run".
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

    runs = bundle.run_section(section)
    if not quiet:
        if runs:
            console.print(f"[green]✓[/] {section} runs")
        else:
            console.print(f"[yellow]○[/] {section} skipped")
    return runs
