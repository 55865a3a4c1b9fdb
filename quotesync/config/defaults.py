# quotesync Default Configuration
# Full default configuration as Python dict and YAML generator

import copy
from typing import Any

import yaml

DEFAULT_SEED_QUOTES: list[dict[str, Any]] = [
    {
        "text": "The only limit to our realization of tomorrow is our doubts of today.",
        "author": "Franklin D. Roosevelt",
        "category": "Motivation",
    },
    {
        "text": "Life is what happens when you're busy making other plans.",
        "author": "John Lennon",
        "category": "Life",
    },
    {
        "text": "The best way to get started is to quit talking and begin doing.",
        "category": "Motivation",
    },
    {
        "text": "Success is not the key to happiness. Happiness is the key to success.",
        "category": "Success",
    },
    {
        "text": "Your time is limited, so don’t waste it living someone else’s life.",
        "category": "Life",
    },
]

DEFAULT_CONFIG: dict[str, Any] = {
    "storage": {
        "snapshot_path": "~/.local/share/quotesync/quotes.json",
        "state_path": "~/.config/quotesync/.session_state.yaml",
    },
    "remote": {
        "enabled": True,
        "endpoint": "https://jsonplaceholder.typicode.com/posts",
        "page_size": 5,
        "timeout_seconds": 10.0,
        "imported_category": "Imported",
    },
    "sync": {
        "interval_seconds": 30.0,
        "dedup_key": "text",
    },
    "seed_quotes": DEFAULT_SEED_QUOTES,
    "output": {
        "verbose": False,
        "colored": True,
    },
}


def default_config() -> dict[str, Any]:
    """Get a deep copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def generate_default_config() -> str:
    """
    Generate default configuration as commented YAML.

    Returns:
        YAML string with header comments.
    """
    header = """\
# quotesync configuration
#
# storage.snapshot_path  JSON array of quotes, rewritten atomically on every change
# remote.endpoint        GET returns a JSON array of records, POST accepts one quote
# remote.page_size       only the first N remote records are consumed per sync
# sync.dedup_key         "text" or "text_author"; decides when two quotes are the same
# seed_quotes            used when the snapshot is missing or unreadable

"""
    body = yaml.dump(default_config(), default_flow_style=False, sort_keys=False, allow_unicode=True)
    return header + body
