# quotesync Quote Book
# Wires store, category index, remote gateway, engine and scheduler together

from __future__ import annotations

import asyncio
import random
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from quotesync.logger import SyncLogger, get_logger
from quotesync.sync.category import ALL_CATEGORIES, CategoryIndex
from quotesync.sync.engine import ReconcileResult, SyncEngine
from quotesync.sync.quote import Quote
from quotesync.sync.remote import RemoteGateway
from quotesync.sync.scheduler import Scheduler
from quotesync.sync.state import StateManager
from quotesync.sync.store import QuoteStore
from quotesync.sync.transfer import export_quotes, import_quotes

if TYPE_CHECKING:
    from quotesync.config.schema import QuoteSyncConfig


class QuoteBook:
    """
    Core API consumed by the presentation layer.

    Owns one store, one category index and one engine. User adds persist
    synchronously; the remote submit is a fire-and-forget task.
    """

    def __init__(
        self,
        store: QuoteStore,
        gateway: RemoteGateway,
        *,
        state_manager: Optional[StateManager] = None,
        logger: Optional[SyncLogger] = None,
        notify: Optional[Callable[[str], None]] = None,
        remote_enabled: bool = True,
    ):
        self.store = store
        self.gateway = gateway
        self.state_manager = state_manager
        self.logger = get_logger(logger)
        self.remote_enabled = remote_enabled
        self.index = CategoryIndex()
        self.engine = SyncEngine(
            store,
            gateway,
            self.index,
            state_manager=state_manager,
            logger=self.logger,
            notify=notify,
        )
        self._submissions: set[asyncio.Task] = set()

    @classmethod
    def from_config(
        cls,
        config: QuoteSyncConfig,
        *,
        gateway: Optional[RemoteGateway] = None,
        logger: Optional[SyncLogger] = None,
        notify: Optional[Callable[[str], None]] = None,
    ) -> QuoteBook:
        """Build a quote book from configuration."""
        store = QuoteStore(
            config.snapshot_path,
            config.get_seed_quotes(),
            dedup_key=config.sync.dedup_key,
            logger=logger,
        )
        return cls(
            store,
            gateway or RemoteGateway.from_config(config.remote, logger=logger),
            state_manager=StateManager(config.state_path),
            logger=logger,
            notify=notify,
            remote_enabled=config.remote.enabled,
        )

    def open(self) -> list[Quote]:
        """Load the store and build the category index."""
        quotes = self.store.load()
        self.index.refresh(quotes)
        return quotes

    async def aclose(self) -> None:
        """Wait for pending submissions and close the gateway."""
        await self.drain()
        await self.gateway.aclose()

    # Browsing

    def quotes(self, category: Optional[str] = None) -> list[Quote]:
        """Quotes in a category; defaults to the stored selection."""
        return self.index.filter(self.store.all(), self._resolve_category(category))

    def categories(self) -> list[str]:
        return self.index.categories(self.store.all())

    def select_category(self, category: str) -> None:
        """
        Store the category filter.

        Raises:
            KeyError: If the category is unknown.
        """
        if category not in self.categories():
            raise KeyError(f"Unknown category: {category}")
        if self.state_manager is not None:
            self.state_manager.set_selected_category(category)

    @property
    def selected_category(self) -> str:
        if self.state_manager is None:
            return ALL_CATEGORIES
        return self.state_manager.state.selected_category

    def random_quote(self, category: Optional[str] = None, *, rng: Optional[random.Random] = None) -> Optional[Quote]:
        """
        Pick a random quote from the filtered view and remember it.

        Returns:
            The quote, or None if the view is empty.
        """
        candidates = self.quotes(category)
        if not candidates:
            return None
        quote = (rng or random).choice(candidates)
        if self.state_manager is not None:
            self.state_manager.set_last_quote(quote)
        return quote

    def last_quote(self) -> Optional[Quote]:
        if self.state_manager is None:
            return None
        return self.state_manager.state.last_quote

    def _resolve_category(self, category: Optional[str]) -> str:
        if category is not None:
            return category
        selected = self.selected_category
        # A stored selection can go stale if the snapshot was replaced
        return selected if selected in self.categories() else ALL_CATEGORIES

    # Mutations

    def add(self, text: str, category: str, author: Optional[str] = None) -> Quote:
        """
        Append a user quote, persist it, and schedule the remote submit.

        The submit is only scheduled when an event loop is running; use
        ``add_and_submit`` from synchronous callers that want it sent.

        Raises:
            ValidationError: If a required field is blank or the quote is a duplicate.
        """
        quote = self.store.append(Quote.create(text, category, author))
        self.index.refresh(self.store.all())

        if self.remote_enabled:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                loop = None
            if loop is not None:
                task = loop.create_task(self.gateway.submit_item(quote))
                self._submissions.add(task)
                task.add_done_callback(self._submissions.discard)
        return quote

    async def add_and_submit(self, text: str, category: str, author: Optional[str] = None) -> tuple[Quote, bool]:
        """
        Append a quote and wait for the best-effort submit.

        Returns:
            Tuple of (quote, accepted_by_remote).
        """
        quote = self.add(text, category, author)
        results = await self.drain()
        return quote, bool(results) and all(results)

    async def drain(self) -> list[bool]:
        """Wait for pending submissions; returns their outcomes."""
        if not self._submissions:
            return []
        results = await asyncio.gather(*list(self._submissions))
        return list(results)

    def import_file(self, source: Path | str) -> list[Quote]:
        """
        Merge an import file (or JSON text) with dedup-by-key.

        Raises:
            ParseError: If the input is malformed; nothing is merged.
        """
        added = import_quotes(self.store, source)
        if added:
            self.index.refresh(self.store.all())
        return added

    def export_file(self, path: Path) -> Path:
        return export_quotes(self.store, path)

    # Sync

    async def sync(self) -> ReconcileResult:
        """Run one reconcile, unless the remote is disabled."""
        if not self.remote_enabled:
            return ReconcileResult(status="remote disabled", skipped=True)
        return await self.engine.reconcile()

    def scheduler(self) -> Scheduler:
        return Scheduler(self.engine, logger=self.logger)
