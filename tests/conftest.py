# quotesync Test Fixtures
# Pytest fixtures for quotesync tests

import json
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import httpx
import pytest
import yaml
from rich.console import Console

from quotesync.logger import SyncLogger
from quotesync.sync.quote import Quote
from quotesync.sync.remote import RemoteGateway
from quotesync.sync.store import QuoteStore

REMOTE_URL = "http://quotes.test/posts"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("QUOTESYNC_CONFIG", raising=False)
    return home


@pytest.fixture
def quiet_logger() -> SyncLogger:
    """Logger that swallows output."""
    return SyncLogger(Console(quiet=True), verbose=True)


@pytest.fixture
def seed_quotes() -> list[Quote]:
    """A small seed collection."""
    return [
        Quote("Stay hungry, stay foolish.", "Life", "Steve Jobs"),
        Quote("Simplicity is the soul of efficiency.", "Work"),
        Quote("Well begun is half done.", "Motivation", "Aristotle"),
    ]


@pytest.fixture
def snapshot_path(temp_dir: Path) -> Path:
    """Path of the durable snapshot (not created)."""
    return temp_dir / "data" / "quotes.json"


@pytest.fixture
def store(snapshot_path: Path, seed_quotes: list[Quote], quiet_logger: SyncLogger) -> QuoteStore:
    """A loaded store seeded with ``seed_quotes``."""
    store = QuoteStore(snapshot_path, seed_quotes, logger=quiet_logger)
    store.load()
    return store


@pytest.fixture
def empty_store(snapshot_path: Path, quiet_logger: SyncLogger) -> QuoteStore:
    """A loaded store with no seed quotes."""
    store = QuoteStore(snapshot_path, [], logger=quiet_logger)
    store.load()
    return store


def read_snapshot(path: Path) -> list[dict]:
    """Decode a snapshot file."""
    return json.loads(path.read_text(encoding="utf-8"))


def make_posts(*bodies: str, user_id: int = 1) -> list[dict]:
    """Remote records in the external representation."""
    return [
        {"userId": user_id, "id": n, "title": f"title {n}", "body": body}
        for n, body in enumerate(bodies, start=1)
    ]


@pytest.fixture
def remote_posts() -> list[dict]:
    """Mutable list served by the fake remote."""
    return []


@pytest.fixture
def remote_requests() -> list[httpx.Request]:
    """Requests received by the fake remote."""
    return []


@pytest.fixture
def remote_transport(remote_posts: list[dict], remote_requests: list[httpx.Request]) -> httpx.MockTransport:
    """Fake remote: GET serves ``remote_posts``, POST echoes with an id."""

    def handler(request: httpx.Request) -> httpx.Response:
        remote_requests.append(request)
        if request.method == "GET":
            return httpx.Response(200, json=list(remote_posts))
        if request.method == "POST":
            body = json.loads(request.content)
            return httpx.Response(201, json={**body, "id": 101})
        return httpx.Response(405)

    return httpx.MockTransport(handler)


@pytest.fixture
def make_gateway(quiet_logger: SyncLogger) -> Callable[..., RemoteGateway]:
    """Factory for gateways backed by a mock transport or handler."""

    def factory(transport=None, handler=None, **kwargs) -> RemoteGateway:
        if handler is not None:
            transport = httpx.MockTransport(handler)
        kwargs.setdefault("logger", quiet_logger)
        return RemoteGateway(REMOTE_URL, transport=transport, **kwargs)

    return factory


@pytest.fixture
def gateway(make_gateway, remote_transport: httpx.MockTransport) -> RemoteGateway:
    """Gateway talking to the fake remote."""
    return make_gateway(remote_transport)


@pytest.fixture
def sample_config(temp_home: Path) -> dict:
    """Create sample configuration dict."""
    return {
        "storage": {
            "snapshot_path": str(temp_home / "data" / "quotes.json"),
            "state_path": str(temp_home / ".config" / "quotesync" / ".session_state.yaml"),
        },
        "remote": {
            "enabled": True,
            "endpoint": REMOTE_URL,
            "page_size": 5,
            "timeout_seconds": 2.0,
            "imported_category": "Imported",
        },
        "sync": {"interval_seconds": 30.0, "dedup_key": "text"},
        "seed_quotes": [
            {"text": "Stay hungry, stay foolish.", "author": "Steve Jobs", "category": "Life"},
            {"text": "Simplicity is the soul of efficiency.", "category": "Work"},
        ],
        "output": {"verbose": False, "colored": False},
    }


@pytest.fixture
def config_file(temp_home: Path, sample_config: dict) -> Path:
    """Create a configuration file."""
    config_dir = temp_home / ".config" / "quotesync"
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path
