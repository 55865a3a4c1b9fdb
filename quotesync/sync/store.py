# quotesync Quote Store
# Authoritative in-memory collection and its durable JSON snapshot

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from quotesync.errors import DuplicateQuoteError, ParseError
from quotesync.logger import SyncLogger, get_logger
from quotesync.sync.quote import DedupKey, Quote, quotes_from_list, unique_by_key
from quotesync.utils.paths import atomic_write, create_backup


def dump_quotes(quotes: Iterable[Quote]) -> str:
    """Serialize quotes to the snapshot/export JSON format."""
    return json.dumps([q.to_dict() for q in quotes], indent=2, ensure_ascii=False) + "\n"


class QuoteStore:
    """
    Owns the quote collection.

    Every successful mutation persists the whole collection before
    returning; a rejected mutation touches neither memory nor disk.
    """

    def __init__(
        self,
        snapshot_path: Path,
        seed_quotes: Optional[list[Quote]] = None,
        *,
        dedup_key: DedupKey = DedupKey.TEXT,
        logger: Optional[SyncLogger] = None,
    ):
        """
        Initialize store.

        Args:
            snapshot_path: Path to the JSON snapshot file.
            seed_quotes: Quotes used when no usable snapshot exists.
            dedup_key: Which fields identify a quote.
            logger: Optional status logger.
        """
        self.snapshot_path = snapshot_path
        self.seed_quotes = list(seed_quotes or [])
        self.dedup_key = dedup_key
        self.logger = get_logger(logger)
        self._quotes: list[Quote] = []
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self) -> list[Quote]:
        """
        Load the collection from the snapshot.

        Falls back to the seed quotes (and persists them) when the snapshot
        is missing or malformed. A malformed snapshot is backed up first.
        """
        try:
            quotes = self._read_snapshot()
        except FileNotFoundError:
            self.logger.debug(f"No snapshot at {self.snapshot_path}, using seed quotes")
            quotes = None
        except ParseError as e:
            backup = create_backup(self.snapshot_path)
            suffix = f" (backup: {backup})" if backup else ""
            self.logger.warning(f"Snapshot unreadable, restoring seed quotes: {e}{suffix}")
            quotes = None

        if quotes is None:
            self._quotes = unique_by_key(self.seed_quotes, self.dedup_key)
            self._loaded = True
            self.persist()
        else:
            self._quotes = unique_by_key(quotes, self.dedup_key)
            self._loaded = True
            if len(self._quotes) != len(quotes):
                self.persist()

        return list(self._quotes)

    def _read_snapshot(self) -> list[Quote]:
        """Read and parse the snapshot file."""
        try:
            raw = self.snapshot_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Snapshot is not valid UTF-8: {e}", source=str(self.snapshot_path)) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ParseError(f"Snapshot is not valid JSON: {e}", source=str(self.snapshot_path)) from e

        return quotes_from_list(data)

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def all(self) -> tuple[Quote, ...]:
        """Get a read-only view of the collection."""
        self._ensure_loaded()
        return tuple(self._quotes)

    def __len__(self) -> int:
        self._ensure_loaded()
        return len(self._quotes)

    def keys(self) -> set[tuple]:
        """Get the dedup keys currently present."""
        self._ensure_loaded()
        return {q.key(self.dedup_key) for q in self._quotes}

    def contains(self, quote: Quote) -> bool:
        """Check if a quote with the same dedup key exists."""
        return quote.key(self.dedup_key) in self.keys()

    def append(self, quote: Quote) -> Quote:
        """
        Add a user-entered quote at the tail and persist.

        Raises:
            ValidationError: If text or category is blank.
            DuplicateQuoteError: If the dedup key already exists.
        """
        quote.validate()
        self._ensure_loaded()

        key = quote.key(self.dedup_key)
        if key in self.keys():
            raise DuplicateQuoteError(f"Quote already exists: {quote.text[:60]!r}", key=key)

        self._quotes.append(quote)
        try:
            self.persist()
        except OSError:
            self._quotes.pop()
            raise
        return quote

    def merge(self, quotes: Iterable[Quote]) -> list[Quote]:
        """
        Append quotes whose dedup key is not present yet.

        Existing quotes keep their position; new ones follow in their
        incoming order. Persists once if anything was added.

        Returns:
            The quotes that were added.
        """
        self._ensure_loaded()
        added = unique_by_key(list(quotes), self.dedup_key, exclude=self.keys())
        if not added:
            return []

        previous = len(self._quotes)
        self._quotes.extend(added)
        try:
            self.persist()
        except OSError:
            del self._quotes[previous:]
            raise
        return added

    def persist(self, collection: Optional[Iterable[Quote]] = None) -> None:
        """
        Overwrite the snapshot with the whole collection.

        Args:
            collection: Quotes that replace the current collection before
                writing (duplicates by key are dropped). Defaults to the
                current collection.
        """
        if collection is not None:
            self._quotes = unique_by_key(list(collection), self.dedup_key)
            self._loaded = True
        atomic_write(self.snapshot_path, dump_quotes(self._quotes))
