# quotesync Configuration Schema
# Pydantic models for YAML configuration validation

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from quotesync.sync.quote import DedupKey, Quote
from quotesync.utils.paths import expand_path


class StorageConfig(BaseModel):
    """Where the quote snapshot and session state live."""

    snapshot_path: str = Field(
        default="~/.local/share/quotesync/quotes.json", description="JSON snapshot of the quote collection"
    )
    state_path: str = Field(
        default="~/.config/quotesync/.session_state.yaml", description="Session state (filter, last quote)"
    )

    @field_validator("snapshot_path", "state_path")
    @classmethod
    def expand_paths(cls, v: str) -> str:
        """Expand ~ and environment variables in paths."""
        return str(expand_path(v))


class RemoteConfig(BaseModel):
    """Remote collection endpoint settings."""

    enabled: bool = Field(default=True, description="Whether remote fetch/submit is enabled")
    endpoint: str = Field(
        default="https://jsonplaceholder.typicode.com/posts", description="Remote collection endpoint (GET/POST)"
    )
    page_size: int = Field(default=5, ge=1, le=100, description="Records consumed per fetch")
    timeout_seconds: float = Field(default=10.0, gt=0, description="HTTP timeout per request")
    imported_category: str = Field(default="Imported", min_length=1, description="Category for fetched quotes")

    @field_validator("endpoint")
    @classmethod
    def check_endpoint(cls, v: str) -> str:
        """Require an http(s) URL."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("endpoint must be an http:// or https:// URL")
        return v


class SyncConfig(BaseModel):
    """Reconciliation settings."""

    interval_seconds: float = Field(default=30.0, gt=0, description="Seconds between scheduled syncs")
    dedup_key: DedupKey = Field(default=DedupKey.TEXT, description="Fields that identify a quote")


class SeedQuote(BaseModel):
    """A built-in starter quote."""

    text: str = Field(min_length=1)
    author: str | None = None
    category: str = Field(min_length=1)

    @field_validator("text", "category")
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Reject whitespace-only values."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    def to_quote(self) -> Quote:
        """Convert to a Quote."""
        return Quote.create(self.text, self.category, self.author)


class OutputConfig(BaseModel):
    """Output configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")


class QuoteSyncConfig(BaseModel):
    """Root configuration model for quotesync."""

    storage: StorageConfig = Field(default_factory=StorageConfig, description="Storage paths")
    remote: RemoteConfig = Field(default_factory=RemoteConfig, description="Remote endpoint")
    sync: SyncConfig = Field(default_factory=SyncConfig, description="Sync settings")
    seed_quotes: list[SeedQuote] = Field(default_factory=list, description="Quotes used when no snapshot exists")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    def get_seed_quotes(self) -> list[Quote]:
        """Seed quotes as Quote objects."""
        return [seed.to_quote() for seed in self.seed_quotes]

    @property
    def snapshot_path(self) -> Path:
        return Path(self.storage.snapshot_path)

    @property
    def state_path(self) -> Path:
        return Path(self.storage.state_path)
