"""Click-based CLI for quotesync."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError as ConfigValidationError
from rich.console import Console as RichConsole

from quotesync import __version__
from quotesync.config import (
    QuoteSyncConfig,
    ensure_config_exists,
    generate_default_config,
    get_config_path,
    load_config,
    load_or_create_config,
    validate_config_file,
)
from quotesync.errors import ParseError, ValidationError
from quotesync.logger import SyncLogger
from quotesync.output import create_console
from quotesync.sync import QuoteBook, RemoteGateway


class AppContext:
    """Per-invocation settings shared by all commands."""

    def __init__(self, config_path: Optional[Path], verbose: bool):
        self.config_path = config_path
        self.verbose = verbose
        self.config: Optional[QuoteSyncConfig] = None
        self.console = create_console(verbose=verbose)
        self.logger = SyncLogger(RichConsole(stderr=True), verbose=verbose)


def _build_gateway(config: QuoteSyncConfig, logger: SyncLogger) -> RemoteGateway:
    return RemoteGateway.from_config(config.remote, logger=logger)


def _load_config(app: AppContext) -> QuoteSyncConfig:
    """Load (or create) the configuration, exiting with 1 on error."""
    try:
        config, created = load_or_create_config(app.config_path)
    except (OSError, ValueError, yaml.YAMLError, ConfigValidationError) as e:
        app.console.print_error(f"Could not load configuration: {e}")
        sys.exit(1)
    if created:
        app.logger.info(f"Created default configuration at {app.config_path or get_config_path()}")
    if not config.output.colored:
        app.console = create_console(verbose=app.verbose, colored=False)
    if config.output.verbose and not app.verbose:
        app.verbose = True
        app.console.verbose = True
        app.logger.verbose = True
    app.config = config
    return config


def _open_book(app: AppContext) -> QuoteBook:
    """Build and load the quote book for a command."""
    config = _load_config(app)
    book = QuoteBook.from_config(
        config,
        gateway=_build_gateway(config, app.logger),
        logger=app.logger,
    )
    try:
        book.open()
    except OSError as e:
        app.console.print_error(f"Could not open quote snapshot: {e}")
        sys.exit(1)
    return book


@click.group()
@click.version_option(version=__version__, prog_name="quotesync")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.config/quotesync/config.yaml or $QUOTESYNC_CONFIG)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """quotesync - a local quote collection that syncs with a remote endpoint.

    \b
    Quotes are kept in a JSON snapshot and merged with remote quotes
    by exact text, so syncing twice never creates duplicates.
    """
    ctx.obj = AppContext(config_path, verbose)


@cli.command("list")
@click.option("--category", "-c", default=None, help="Category to show (default: stored filter)")
@click.pass_obj
def list_quotes(app: AppContext, category: Optional[str]) -> None:
    """List quotes, filtered by category."""
    book = _open_book(app)
    selected = category or book.selected_category
    app.console.print_quotes(book.quotes(category), category=selected)


@cli.command()
@click.pass_obj
def categories(app: AppContext) -> None:
    """Show all categories; the stored filter is marked."""
    book = _open_book(app)
    quotes = book.store.all()
    counts = {"all": len(quotes)}
    for quote in quotes:
        counts[quote.category] = counts.get(quote.category, 0) + 1
    app.console.print_categories(book.categories(), selected=book.selected_category, counts=counts)


@cli.command("filter")
@click.argument("category")
@click.pass_obj
def filter_category(app: AppContext, category: str) -> None:
    """Store CATEGORY as the default filter ("all" clears it)."""
    book = _open_book(app)
    try:
        book.select_category(category)
    except KeyError:
        app.console.print_error(f"Unknown category '{category}'. Known: {', '.join(book.categories())}")
        sys.exit(1)
    app.console.print_success(f"Filter set to '{category}'")
    app.console.print_quotes(book.quotes(category), category=category)


@cli.command("random")
@click.option("--category", "-c", default=None, help="Category to pick from (default: stored filter)")
@click.pass_obj
def random_quote(app: AppContext, category: Optional[str]) -> None:
    """Show a random quote."""
    book = _open_book(app)
    quote = book.random_quote(category)
    if quote is None:
        app.console.print_warning("No quotes found in this category.")
        return
    app.console.print_quote(quote)


@cli.command()
@click.pass_obj
def last(app: AppContext) -> None:
    """Show the last quote displayed by 'random'."""
    book = _open_book(app)
    quote = book.last_quote()
    if quote is None:
        app.console.print_info("No quote shown yet. Try 'quotesync random'.")
        return
    app.console.print_quote(quote, title="Last quote")


@cli.command()
@click.argument("text")
@click.option("--category", "-c", required=True, help="Quote category")
@click.option("--author", "-a", default=None, help="Quote author (optional)")
@click.pass_obj
def add(app: AppContext, text: str, category: str, author: Optional[str]) -> None:
    """Add a quote and send it to the remote (best effort)."""
    book = _open_book(app)

    async def _add():
        try:
            return await book.add_and_submit(text, category, author)
        finally:
            await book.aclose()

    try:
        quote, submitted = asyncio.run(_add())
    except ValidationError as e:
        app.console.print_error(str(e))
        sys.exit(1)
    except OSError as e:
        app.console.print_error(f"Could not save quote: {e}")
        sys.exit(1)

    app.console.print_success("Quote added!")
    app.console.print_quote(quote)
    if book.remote_enabled and not submitted:
        app.console.print_warning("Saved locally; the remote did not accept it.")


@cli.command()
@click.pass_obj
def sync(app: AppContext) -> None:
    """Fetch remote quotes once and merge new ones."""
    book = _open_book(app)

    async def _sync():
        try:
            return await book.sync()
        finally:
            await book.aclose()

    try:
        result = asyncio.run(_sync())
    except OSError as e:
        app.console.print_error(f"Could not save synced quotes: {e}")
        sys.exit(1)
    app.console.print_reconcile_result(result)


@cli.command()
@click.option("--interval", "-i", type=float, default=None, help="Seconds between syncs (default: from config)")
@click.option("--duration", "-d", type=float, default=None, help="Stop after this many seconds")
@click.pass_obj
def watch(app: AppContext, interval: Optional[float], duration: Optional[float]) -> None:
    """Sync now and then periodically until interrupted."""
    book = _open_book(app)
    if not book.remote_enabled:
        app.console.print_error("Remote sync is disabled in the configuration")
        sys.exit(1)

    seconds = interval if interval is not None else app.config.sync.interval_seconds
    if seconds <= 0:
        app.console.print_error("--interval must be positive")
        sys.exit(1)

    async def _watch() -> int:
        scheduler = book.scheduler()
        scheduler.start(seconds)
        try:
            if duration is None:
                await asyncio.Event().wait()
            else:
                await asyncio.sleep(duration)
        finally:
            scheduler.stop()
            await scheduler.wait_idle()
            await book.aclose()
        return scheduler.ticks

    app.logger.info(f"Syncing every {seconds:g}s (Ctrl-C to stop)")
    try:
        ticks = asyncio.run(_watch())
    except KeyboardInterrupt:
        app.logger.info("Stopped")
        return
    app.logger.info(f"Stopped after {ticks} sync run(s)")


@cli.command("export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def export_cmd(app: AppContext, path: Path) -> None:
    """Export all quotes to a JSON file."""
    book = _open_book(app)
    try:
        book.export_file(path)
    except OSError as e:
        app.console.print_error(f"Export failed: {e}")
        sys.exit(1)
    app.console.print_success(f"Quotes exported! ({len(book.store)} to {path})")


@cli.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def import_cmd(app: AppContext, path: Path) -> None:
    """Import quotes from a JSON file (duplicates are skipped)."""
    book = _open_book(app)
    try:
        added = book.import_file(path)
    except ParseError as e:
        app.console.print_error(str(e))
        sys.exit(1)
    except OSError as e:
        app.console.print_error(f"Import failed: {e}")
        sys.exit(1)
    app.console.print_success(f"Quotes imported! ({len(added)} new)")


@cli.group()
def config() -> None:
    """Configuration management.

    \b
    Keys:
      storage.snapshot_path   JSON snapshot of all quotes
      remote.endpoint         remote collection URL
      remote.page_size        remote records merged per sync
      sync.interval_seconds   interval for 'quotesync watch'
      sync.dedup_key          text | text_author
    """


@config.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration")
@click.pass_obj
def config_init(app: AppContext, force: bool) -> None:
    """Write the default configuration file."""
    path, created = ensure_config_exists(app.config_path, force=force)
    if created:
        app.console.print_success(f"Configuration written to {path}")
    else:
        app.console.print_info(f"Configuration already exists at {path} (use --force to overwrite)")


@config.command("show")
@click.pass_obj
def config_show(app: AppContext) -> None:
    """Show the configuration file."""
    path = app.config_path or get_config_path()
    if not path.exists():
        app.console.print_warning(f"Configuration file not found: {path}")
        app.console.print_info("Defaults in effect:")
        app.console.print(generate_default_config(), markup=False, highlight=False)
        return

    try:
        loaded = load_config(path)
    except (ValueError, yaml.YAMLError, ConfigValidationError) as e:
        app.console.print_warning(f"Configuration does not load: {e}")
    else:
        app.console.print_config_summary(str(path), loaded.storage.snapshot_path, loaded.remote.endpoint)
    app.console.print(path.read_text(encoding="utf-8"), markup=False, highlight=False)


@config.command("validate")
@click.pass_obj
def config_validate(app: AppContext) -> None:
    """Check the configuration file for errors."""
    valid, errors = validate_config_file(app.config_path)
    if valid:
        app.console.print_success("Configuration is valid")
        return
    app.console.print_error("Configuration has errors:")
    for error in errors:
        app.console.print(f"  • {error}", markup=False)
    sys.exit(1)


if __name__ == "__main__":
    cli()
