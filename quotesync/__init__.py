"""quotesync - local-first quote collection with remote reconciliation.

Keeps a small quote collection in a JSON snapshot, lets you browse,
filter, add, import and export quotes, and periodically merges quotes
from a remote endpoint without creating duplicates.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "Quote",
    "QuoteStore",
    "CategoryIndex",
    "RemoteGateway",
    "SyncEngine",
    "Scheduler",
    "QuoteBook",
    "QuoteSyncError",
    "ValidationError",
    "DuplicateQuoteError",
    "NetworkError",
    "ParseError",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("QuoteSyncError", "ValidationError", "DuplicateQuoteError", "NetworkError", "ParseError"):
        from quotesync import errors

        return getattr(errors, name)
    if name in ("Quote", "QuoteStore", "CategoryIndex", "RemoteGateway", "SyncEngine", "Scheduler", "QuoteBook"):
        from quotesync import sync

        return getattr(sync, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
