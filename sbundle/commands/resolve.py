"""
sbundle Resolve Command - Print the absolute path of a filesystem object
"""

from pathlib import Path

from rich.console import Console

from sbundle.core.bundle import Bundle
from sbundle.core.errors import BundleFormatError, LabelNotFoundError


def run_resolve(descriptor_path: Path, label: str, console: Console = None) -> bool:
    console = console or Console()

    try:
        bundle = Bundle.load(descriptor_path)
        path = bundle.resolve(label)
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/] {e}")
        return False
    except BundleFormatError as e:
        console.print(f"[red]Error loading bundle:[/] {e}")
        return False
    except LabelNotFoundError as e:
        console.print(f"[red]Error:[/] {e}")
        known = ", ".join(sorted(bundle.fs_objects)) or "none"
        console.print(f"  [dim]Registered labels: {known}[/]")
        return False

    console.print(path, markup=False, highlight=False, soft_wrap=True)
    return True
