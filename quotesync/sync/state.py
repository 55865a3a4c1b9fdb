# quotesync Session State
# Selected category, last shown quote and last sync outcome

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import yaml

from quotesync.errors import ParseError
from quotesync.sync.category import ALL_CATEGORIES
from quotesync.sync.quote import Quote
from quotesync.utils.paths import atomic_write


@dataclass
class SessionState:
    """
    Presentation state that survives between runs.

    Nothing here affects the quote collection itself.
    """

    version: str = "1.0"
    selected_category: str = ALL_CATEGORIES
    last_quote: Optional[Quote] = None
    last_sync: Optional[str] = None  # ISO format datetime
    last_status: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {
            "version": self.version,
            "selected_category": self.selected_category,
        }
        if self.last_quote is not None:
            data["last_quote"] = self.last_quote.to_dict()
        if self.last_sync is not None:
            data["last_sync"] = self.last_sync
        if self.last_status is not None:
            data["last_status"] = self.last_status
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionState":
        """Create from dictionary. An unreadable last quote is dropped."""
        last_quote = None
        if data.get("last_quote") is not None:
            try:
                last_quote = Quote.from_dict(data["last_quote"])
            except ParseError:
                last_quote = None

        selected = data.get("selected_category")
        return cls(
            version=str(data.get("version", "1.0")),
            selected_category=selected if isinstance(selected, str) and selected else ALL_CATEGORIES,
            last_quote=last_quote,
            last_sync=data.get("last_sync"),
            last_status=data.get("last_status"),
        )


class StateManager:
    """
    Manages session state persistence.

    Handles loading, saving, and updating session state.
    """

    def __init__(self, state_path: Optional[Path] = None):
        """
        Initialize state manager.

        Args:
            state_path: Path to state file. Defaults to ~/.config/quotesync/.session_state.yaml
        """
        if state_path is None:
            state_path = Path.home() / ".config" / "quotesync" / ".session_state.yaml"
        self.state_path = state_path
        self._state: Optional[SessionState] = None

    @property
    def state(self) -> SessionState:
        """Get current state, loading if necessary."""
        if self._state is None:
            self._state = self.load()
        return self._state

    def load(self) -> SessionState:
        """Load state from file. Missing, unreadable or corrupt files yield a fresh state."""
        if not self.state_path.exists():
            return SessionState()

        try:
            with open(self.state_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError, UnicodeDecodeError):
            return SessionState()

        if not isinstance(data, dict):
            return SessionState()
        return SessionState.from_dict(data)

    def save(self) -> None:
        """Save state to file."""
        if self._state is None:
            return

        content = yaml.dump(self._state.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True)
        atomic_write(self.state_path, content)

    def set_selected_category(self, category: str) -> None:
        """Remember the category filter and save."""
        self.state.selected_category = category or ALL_CATEGORIES
        self.save()

    def set_last_quote(self, quote: Optional[Quote]) -> None:
        """Remember the last displayed quote and save."""
        self.state.last_quote = quote
        self.save()

    def record_sync(self, status: str) -> None:
        """Record the outcome of a reconcile and save."""
        self.state.last_sync = datetime.now().isoformat(timespec="seconds")
        self.state.last_status = status
        self.save()

    def reset(self) -> None:
        """Reset state to empty."""
        self._state = SessionState()
        self.save()
