# quotesync Import / Export
# Bulk JSON export of the collection and dedup-merging import

import json
from collections.abc import Iterable
from pathlib import Path

from quotesync.errors import ParseError
from quotesync.sync.quote import Quote, quotes_from_list
from quotesync.sync.store import QuoteStore, dump_quotes
from quotesync.utils.paths import atomic_write


def export_json(quotes: Iterable[Quote]) -> str:
    """Serialize quotes in the same shape as the durable snapshot."""
    return dump_quotes(quotes)


def export_quotes(store: QuoteStore, path: Path) -> Path:
    """
    Write the whole collection to a JSON file.

    Args:
        store: Store to export.
        path: Destination file (overwritten atomically).

    Returns:
        The written path.
    """
    atomic_write(path, export_json(store.all()))
    return path


def parse_import(content: str, *, source: str = "<input>") -> list[Quote]:
    """
    Parse import content into quotes.

    Raises:
        ParseError: If the content is not a JSON array of well-formed quotes.
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid file format: {e.msg} (line {e.lineno})", source=source) from e

    try:
        return quotes_from_list(data)
    except ParseError as e:
        raise ParseError(f"Invalid file format: {e}", source=source) from e


def import_quotes(store: QuoteStore, source: Path | str) -> list[Quote]:
    """
    Merge quotes from a JSON file or JSON text into the store.

    Uses the same dedup-by-key merge as sync. Nothing is merged unless
    the whole input parses.

    Args:
        store: Store to merge into.
        source: Path to a JSON file, or raw JSON text.

    Returns:
        The quotes that were added.

    Raises:
        ParseError: If the input is malformed.
        OSError: If the file cannot be read.
    """
    if isinstance(source, Path):
        try:
            content = source.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ParseError("Invalid file format: not UTF-8 text", source=str(source)) from e
        quotes = parse_import(content, source=str(source))
    else:
        quotes = parse_import(source)

    return store.merge(quotes)
