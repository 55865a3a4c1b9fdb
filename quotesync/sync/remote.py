# quotesync Remote Gateway
# Boundary adapter for the remote quote collection (httpx)

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

import httpx

from quotesync.errors import NetworkError
from quotesync.logger import SyncLogger, get_logger
from quotesync.sync.quote import Quote

if TYPE_CHECKING:
    from quotesync.config.schema import RemoteConfig

DEFAULT_ENDPOINT = "https://jsonplaceholder.typicode.com/posts"


def record_to_quote(record: Any, category: str) -> Optional[Quote]:
    """
    Map one external record to a Quote.

    Text comes from ``body``, falling back to ``title``; the author is
    derived from ``userId`` when present. Returns None for records
    without usable text.
    """
    if not isinstance(record, dict):
        return None

    text = None
    for field_name in ("body", "title"):
        value = record.get(field_name)
        if isinstance(value, str) and value.strip():
            text = value
            break
    if text is None:
        return None

    user_id = record.get("userId")
    author = f"User {user_id}" if user_id not in (None, "") else None
    return Quote(text=text, category=category, author=author)


class RemoteGateway:
    """
    Fetches the remote quote list and submits newly added quotes.

    Fetch failures raise NetworkError; submit failures are logged and
    swallowed.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        *,
        page_size: int = 5,
        timeout_seconds: float = 10.0,
        imported_category: str = "Imported",
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[SyncLogger] = None,
    ):
        """
        Initialize gateway.

        Args:
            endpoint: Remote collection URL (GET to read, POST to submit).
            page_size: Number of remote records consumed per fetch.
            timeout_seconds: Per-request timeout; a timeout is a NetworkError.
            imported_category: Category assigned to fetched quotes.
            client: Optional externally owned client.
            transport: Optional transport for an internally created client.
            logger: Optional status logger.
        """
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.endpoint = endpoint
        self.page_size = page_size
        self.timeout_seconds = timeout_seconds
        self.imported_category = imported_category
        self.logger = get_logger(logger)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout_seconds,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_config(
        cls,
        config: RemoteConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[SyncLogger] = None,
    ) -> RemoteGateway:
        """Create a gateway from the ``remote`` config section."""
        return cls(
            config.endpoint,
            page_size=config.page_size,
            timeout_seconds=config.timeout_seconds,
            imported_category=config.imported_category,
            transport=transport,
            logger=logger,
        )

    async def __aenter__(self) -> RemoteGateway:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this gateway created it."""
        if self._owns_client:
            await self._client.aclose()

    async def fetch_remote_items(self) -> list[Quote]:
        """
        Fetch the first page of remote records as quotes.

        Returns:
            Up to ``page_size`` quotes, in remote order.

        Raises:
            NetworkError: On timeout, transport error, non-2xx status,
                or a payload that is not a JSON array.
        """
        try:
            response = await self._client.get(self.endpoint)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise NetworkError(f"Timed out fetching {self.endpoint}", url=self.endpoint) from e
        except httpx.HTTPStatusError as e:
            raise NetworkError(
                f"Remote returned HTTP {e.response.status_code}",
                url=self.endpoint,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Request to {self.endpoint} failed: {e}", url=self.endpoint) from e

        try:
            data = response.json()
        except ValueError as e:
            raise NetworkError("Remote response is not valid JSON", url=self.endpoint) from e

        if not isinstance(data, list):
            raise NetworkError(
                f"Expected a JSON array from remote, got {type(data).__name__}", url=self.endpoint
            )

        quotes: list[Quote] = []
        for record in data[: self.page_size]:
            quote = record_to_quote(record, self.imported_category)
            if quote is None:
                self.logger.debug(f"Skipping remote record without text: {record!r:.80}")
                continue
            quotes.append(quote)

        self.logger.debug(f"Fetched {len(quotes)} remote quote(s) from {self.endpoint}")
        return quotes

    async def submit_item(self, quote: Quote) -> bool:
        """
        Best-effort POST of a newly added quote.

        Returns:
            True if the remote accepted it. Failures are logged, never raised.
        """
        try:
            response = await self._client.post(self.endpoint, json=quote.to_dict())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self.logger.warning(f"Remote rejected quote: HTTP {e.response.status_code}")
            return False
        except httpx.HTTPError as e:
            self.logger.warning(f"Could not submit quote to remote: {str(e) or type(e).__name__}")
            return False

        self.logger.debug(f"Posted to server: {response.text[:200]}")
        return True
