"""
sbundle Create Command - Allocate a build bundle and write its descriptor
"""

import warnings
from pathlib import Path
from typing import Any, Optional

import yaml
from rich.console import Console
from rich.panel import Panel

from sbundle.constants import DESCRIPTOR_FILENAME, load_build_config, warn_unknown_sections
from sbundle.core.allocator import new_bundle
from sbundle.core.bundle import Bundle
from sbundle.core.errors import AllocationError, BundleFormatError, DirectoryCreationError
from sbundle.logger import BundleLogger


def load_recipe(recipe_path: Path) -> Any:
    """Load a parsed recipe from a YAML or JSON file.

    The recipe is carried opaquely; only its JSON-compatible shape matters.
    """
    with open(recipe_path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def run_create(
    prefix: Optional[str] = None,
    config_path: Optional[Path] = None,
    recipe_path: Optional[Path] = None,
    sections: tuple = (),
    bind_paths: tuple = (),
    force: Optional[bool] = None,
    update: Optional[bool] = None,
    notest: Optional[bool] = None,
    output: Optional[Path] = None,
    verbose: bool = False,
    console: Console = None
) -> bool:
    """Allocate a bundle and persist its descriptor.

    CLI values win over the build config; unset CLI values fall back to it.

    Returns:
        True if the bundle was created, False otherwise
    """
    console = console or Console()
    logger = BundleLogger(console=console, verbose=verbose)

    try:
        config = load_build_config(config_path)
        recipe = load_recipe(recipe_path) if recipe_path else config.get("recipe")
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/] File not found: {e.filename}")
        return False
    except (yaml.YAMLError, ValueError) as e:
        console.print(f"[red]Error:[/] Invalid configuration: {e}")
        return False

    try:
        # Reject recipes the descriptor cannot hold before touching the disk
        Bundle(path="", recipe=recipe).to_json()
    except BundleFormatError as e:
        console.print(f"[red]Error:[/] Invalid recipe: {e}")
        return False

    section_list = list(sections) if sections else list(config.get("sections") or ["all"])
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        warn_unknown_sections(section_list, verbose=True)
    for warning in caught:
        logger.warning(str(warning.message))

    logger.section("Allocating bundle")
    try:
        with logger.indent(), logger.timed_operation("Creating staging directory"):
            bundle = new_bundle(prefix or config.get("prefix", ""), logger=logger)
    except AllocationError as e:
        console.print(f"[red]Error:[/] {e}")
        return False
    except DirectoryCreationError as e:
        console.print(f"[red]Error:[/] {e}")
        console.print(f"  [dim]Partially created directories may remain under {e.path}[/]")
        return False

    bundle.recipe = recipe
    bundle.sections = section_list
    for path in (config.get("bind_paths") or []) + list(bind_paths):
        bundle.add_bind_path(path)
    bundle.force = force if force is not None else config.get("force", False)
    bundle.update = update if update is not None else config.get("update", False)
    bundle.no_test = notest if notest is not None else config.get("notest", False)

    descriptor_path = output or Path(bundle.path) / DESCRIPTOR_FILENAME
    try:
        bundle.save(descriptor_path)
    except BundleFormatError as e:
        console.print(f"[red]Error:[/] {e}")
        console.print(f"  [dim]Staging directory left at {bundle.path}[/]")
        return False
    except (IOError, OSError) as e:
        console.print(f"[red]Error:[/] Could not write descriptor: {e}")
        return False

    logger.print_stats_summary()

    console.print(Panel(
        f"[bold]Bundle:[/] {bundle.path}\n"
        f"[bold]Rootfs:[/] {bundle.rootfs}\n"
        f"[bold]Descriptor:[/] {descriptor_path}",
        title="[green]✓ Bundle created[/]",
        border_style="green"
    ))
    return True
