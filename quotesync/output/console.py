# quotesync Console Output
# Rich-based console output for quotes and sync results

from typing import Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from quotesync.sync.engine import ReconcileResult
from quotesync.sync.quote import Quote


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for quotes, categories and sync results.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True, console: Optional[RichConsole] = None):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
            console: Optional Rich console to write to.
        """
        self.verbose = verbose
        self._console = console or RichConsole(no_color=not colored)

    @property
    def rich(self) -> RichConsole:
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{escape(message)}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{escape(message)}[/blue]")

    def print_quote(self, quote: Quote, *, title: Optional[str] = None) -> None:
        """Print a single quote as a panel."""
        attribution = f"- {quote.author} ({quote.category})" if quote.author else f"- {quote.category}"
        self._console.print(
            Panel(
                f"[italic]“{escape(quote.text)}”[/italic]\n\n[dim]{escape(attribution)}[/dim]",
                title=title,
                border_style="cyan",
            )
        )

    def print_quotes(self, quotes: list[Quote], *, category: str = "all") -> None:
        """
        Print quotes as a table.

        Args:
            quotes: Quotes to display, already filtered.
            category: Active filter, shown in the title.
        """
        if not quotes:
            self._console.print("[dim]No quotes found in this category.[/dim]")
            return

        title = "Quotes" if category == "all" else f"Quotes - {category}"
        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Quote")
        table.add_column("Author", style="cyan")
        table.add_column("Category", style="magenta")

        for number, quote in enumerate(quotes, start=1):
            table.add_row(str(number), escape(quote.text), escape(quote.author or ""), escape(quote.category))

        self._console.print(table)

    def print_categories(self, categories: list[str], *, selected: str = "all", counts: Optional[dict] = None) -> None:
        """Print the category set, marking the selected one."""
        for name in categories:
            marker = "[green]●[/green]" if name == selected else "[dim]○[/dim]"
            count = ""
            if counts is not None and name in counts:
                count = f" [dim]({counts[name]})[/dim]"
            self._console.print(f"{marker} {escape(name)}{count}")

    def print_reconcile_result(self, result: ReconcileResult) -> None:
        """Print the outcome of one reconcile."""
        if result.skipped:
            self._console.print(f"[dim]Sync skipped ({escape(result.status)})[/dim]")
            return

        if not result.success:
            self._console.print(
                Panel(
                    f"[red]Sync failed[/red]\n{escape(result.error or '')}\nLocal quotes are unchanged.",
                    title="Sync",
                    border_style="red",
                )
            )
            return

        lines = [
            f"[green]{escape(result.status.capitalize())}[/green]",
            f"Fetched: {result.fetched}, new: {result.added_count}",
        ]
        if self.verbose:
            lines.extend(f"  + {escape(q.text[:70])}" for q in result.added)
        self._console.print(
            Panel("\n".join(lines), title="Sync", border_style="green" if result.added else "blue")
        )

    def print_config_summary(self, config_path: str, snapshot_path: str, endpoint: str) -> None:
        """Print configuration summary."""
        self._console.print(
            Panel(
                f"Config: {config_path}\nSnapshot: {snapshot_path}\nRemote: {endpoint}",
                title="quotesync Configuration",
                border_style="blue",
            )
        )


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
