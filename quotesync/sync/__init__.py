# quotesync Sync Module
# Local-first quote store and reconciliation engine

from quotesync.sync.category import ALL_CATEGORIES, CategoryIndex
from quotesync.sync.engine import ReconcileResult, SyncEngine, SyncPhase
from quotesync.sync.quote import DedupKey, Quote
from quotesync.sync.remote import RemoteGateway
from quotesync.sync.scheduler import Scheduler
from quotesync.sync.service import QuoteBook
from quotesync.sync.state import SessionState, StateManager
from quotesync.sync.store import QuoteStore
from quotesync.sync.transfer import export_json, export_quotes, import_quotes, parse_import

__all__ = [
    # Item
    "Quote",
    "DedupKey",
    # Store
    "QuoteStore",
    # Category
    "CategoryIndex",
    "ALL_CATEGORIES",
    # Remote
    "RemoteGateway",
    # Engine
    "SyncEngine",
    "SyncPhase",
    "ReconcileResult",
    "Scheduler",
    # State
    "SessionState",
    "StateManager",
    # Import / export
    "export_json",
    "export_quotes",
    "import_quotes",
    "parse_import",
    # Facade
    "QuoteBook",
]
