"""Rich console output for store and sync status lines."""

from typing import Optional

from rich.console import Console
from rich.markup import escape


class SyncLogger:
    """Rich console output for sync operations."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        """Initialize logger.

        Args:
            console: Rich Console instance
            verbose: Enable verbose output
        """
        self.console = console or Console(stderr=True)
        self.verbose = verbose

    def debug(self, message: str) -> None:
        """Dim message, shown only in verbose mode."""
        if self.verbose:
            self.console.print(f"[dim]· {escape(message)}[/dim]")

    def info(self, message: str) -> None:
        """Blue info message."""
        self.console.print(f"[blue]ℹ[/blue] {escape(message)}")

    def success(self, message: str) -> None:
        """Green success message."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        """Yellow warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        """Red error message."""
        self.console.print(f"[red]✗[/red] {escape(message)}")


def get_logger(logger: Optional[SyncLogger] = None) -> SyncLogger:
    """Return the given logger or a default stderr one."""
    return logger if logger is not None else SyncLogger()
