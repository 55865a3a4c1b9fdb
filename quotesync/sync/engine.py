# quotesync Sync Engine
# Reconciles the local store against the remote collection

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from quotesync.errors import NetworkError
from quotesync.logger import SyncLogger, get_logger
from quotesync.sync.category import CategoryIndex
from quotesync.sync.quote import Quote
from quotesync.sync.remote import RemoteGateway
from quotesync.sync.state import StateManager
from quotesync.sync.store import QuoteStore

STATUS_UP_TO_DATE = "up to date"
STATUS_FAILED = "failed"
STATUS_SKIPPED = "skipped"


class SyncPhase(str, Enum):
    """Reconciliation state."""

    IDLE = "idle"
    FETCHING = "fetching"
    MERGING = "merging"


def synced_message(count: int) -> str:
    """Notification text for newly synced quotes."""
    noun = "quote" if count == 1 else "quotes"
    return f"{count} new {noun} synced"


@dataclass
class ReconcileResult:
    """Result of one reconcile call."""

    status: str = STATUS_UP_TO_DATE
    fetched: int = 0
    added: list[Quote] = field(default_factory=list)
    skipped: bool = False
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        """True unless the fetch failed."""
        return self.error is None

    @property
    def added_count(self) -> int:
        return len(self.added)


class SyncEngine:
    """
    Fetch-merge-persist cycle against the remote collection.

    Only one reconcile runs at a time; a call made while another is in
    flight returns immediately without touching the network.
    """

    def __init__(
        self,
        store: QuoteStore,
        gateway: RemoteGateway,
        index: Optional[CategoryIndex] = None,
        *,
        state_manager: Optional[StateManager] = None,
        logger: Optional[SyncLogger] = None,
        notify: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize sync engine.

        Args:
            store: Quote store to merge into.
            gateway: Remote gateway to fetch from.
            index: Category index refreshed after new quotes arrive.
            state_manager: Optional session state for recording sync outcomes.
            logger: Optional status logger.
            notify: Optional callback receiving "N new quotes synced" messages.
        """
        self.store = store
        self.gateway = gateway
        self.index = index or CategoryIndex()
        self.state_manager = state_manager
        self.logger = get_logger(logger)
        self.notify = notify
        self._phase = SyncPhase.IDLE
        self.runs = 0

    @property
    def phase(self) -> SyncPhase:
        return self._phase

    @property
    def is_running(self) -> bool:
        return self._phase is not SyncPhase.IDLE

    async def reconcile(self) -> ReconcileResult:
        """
        Run one reconcile cycle.

        Returns:
            ReconcileResult. ``skipped`` is set when another cycle was
            already running; ``error`` is set when the fetch failed.
        """
        if self.is_running:
            self.logger.debug(f"Sync already {self._phase.value}, skipping")
            return ReconcileResult(status=STATUS_SKIPPED, skipped=True)

        self._phase = SyncPhase.FETCHING
        try:
            try:
                remote_quotes = await self.gateway.fetch_remote_items()
            except NetworkError as e:
                self.logger.warning(f"Sync failed: {e}")
                self._record(STATUS_FAILED)
                return ReconcileResult(status=STATUS_FAILED, error=str(e))

            # Baseline is read now, so appends made during the fetch count
            self._phase = SyncPhase.MERGING
            added = self.store.merge(remote_quotes)
            result = ReconcileResult(fetched=len(remote_quotes), added=added)

            if added:
                self.index.refresh(self.store.all())
                result.status = synced_message(len(added))
                self.logger.success(result.status)
                if self.notify is not None:
                    self.notify(result.status)
            else:
                self.logger.debug("Quotes up to date")

            self._record(result.status)
            return result
        finally:
            self._phase = SyncPhase.IDLE
            self.runs += 1

    def _record(self, status: str) -> None:
        if self.state_manager is not None:
            self.state_manager.record_sync(status)
