# quotesync Errors
# Error taxonomy shared by the store, the remote gateway and import/export

from typing import Optional


class QuoteSyncError(Exception):
    """Base class for all quotesync errors."""


class ValidationError(QuoteSyncError):
    """A quote was rejected before any mutation happened."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class DuplicateQuoteError(ValidationError):
    """A quote with the same dedup key is already in the collection."""

    def __init__(self, message: str, key: tuple = ()):
        super().__init__(message, field="text")
        self.key = key


class NetworkError(QuoteSyncError):
    """Remote fetch or submit failed (transport, timeout, status or payload)."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ParseError(QuoteSyncError):
    """Malformed snapshot or import content."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source
