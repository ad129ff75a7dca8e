"""
Logging utilities for sbundle

Provides verbose-gated console logging for:
- Staging directory allocation
- Filesystem object creation
- Timing of operations
"""

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table


@dataclass
class BundleStats:
    """Counters collected while a bundle is being prepared."""
    directories_created: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    total_time_ms: float = 0

    def summary(self) -> Dict[str, Any]:
        return {
            "directories_created": len(self.directories_created),
            "total_time_ms": self.total_time_ms,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings)
        }


class BundleLogger:
    """
    Logger handed to the allocator and commands.

    Nothing is printed unless verbose is set; warnings and errors are
    still collected into stats so callers can report them later.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        verbose: bool = False,
        collect_stats: bool = True
    ):
        self.console = console or Console()
        self.verbose = verbose
        self.collect_stats = collect_stats
        self.stats = BundleStats()
        self._indent_level = 0

    def _prefix(self) -> str:
        return "  " * self._indent_level

    def _log(self, message: str, style: str = "dim") -> None:
        if self.verbose:
            self.console.print(f"{self._prefix()}[{style}]{message}[/]")

    def debug(self, message: str) -> None:
        self._log(message, "dim")

    def info(self, message: str) -> None:
        self._log(message, "dim")

    def success(self, message: str) -> None:
        self._log(message, "green")

    def warning(self, message: str) -> None:
        self._log(f"⚠ {message}", "yellow")
        if self.collect_stats:
            self.stats.warnings.append(message)

    def error(self, message: str) -> None:
        self._log(f"✗ {message}", "red")
        if self.collect_stats:
            self.stats.errors.append(message)

    def section(self, title: str) -> None:
        if self.verbose:
            self.console.print(f"{self._prefix()}[bold cyan]▸ {title}[/]")

    @contextmanager
    def indent(self):
        """Context manager for indented logging."""
        self._indent_level += 1
        try:
            yield
        finally:
            self._indent_level -= 1

    @contextmanager
    def timed_operation(self, operation_name: str):
        """Context manager that times an operation."""
        start = time.time()
        self.info(f"{operation_name}...")
        try:
            yield
        finally:
            duration = (time.time() - start) * 1000
            if self.collect_stats:
                self.stats.total_time_ms += duration
            self.info(f"{operation_name} completed in {duration:.1f}ms")

    def log_directory_created(self, path: str, label: Optional[str] = None) -> None:
        """Log creation of a staging or filesystem object directory."""
        if self.collect_stats:
            self.stats.directories_created.append(path)
        if label:
            self.debug(f"Created {label} directory {path}")
        else:
            self.debug(f"Created temporary directory for bundle {path}")

    def print_stats_summary(self) -> None:
        """Print a summary table of collected statistics."""
        if not self.verbose or not self.collect_stats:
            return

        summary = self.stats.summary()

        self.console.print()
        table = Table(title="Bundle Statistics", show_header=True, header_style="bold cyan")
        table.add_column("Metric", style="dim")
        table.add_column("Value", justify="right")

        table.add_row("Directories Created", str(summary["directories_created"]))
        table.add_row("Total Time", f"{summary['total_time_ms']:.0f}ms")
        table.add_row("Errors", str(summary["error_count"]))
        table.add_row("Warnings", str(summary["warning_count"]))

        self.console.print(table)
