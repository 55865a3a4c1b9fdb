# quotesync Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from quotesync.config.defaults import DEFAULT_CONFIG, DEFAULT_SEED_QUOTES, generate_default_config
from quotesync.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    load_or_create_config,
    save_config,
    validate_config_file,
)
from quotesync.config.schema import (
    OutputConfig,
    QuoteSyncConfig,
    RemoteConfig,
    SeedQuote,
    StorageConfig,
    SyncConfig,
)

__all__ = [
    # Schema
    "QuoteSyncConfig",
    "StorageConfig",
    "RemoteConfig",
    "SyncConfig",
    "SeedQuote",
    "OutputConfig",
    # Loader
    "load_config",
    "save_config",
    "get_config_path",
    "ensure_config_exists",
    "load_or_create_config",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "DEFAULT_SEED_QUOTES",
    "generate_default_config",
]
