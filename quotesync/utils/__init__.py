# quotesync Utilities Module
# Helper functions for path handling and atomic writes

from quotesync.utils.paths import (
    atomic_write,
    create_backup,
    ensure_dir,
    expand_path,
)

__all__ = [
    "atomic_write",
    "create_backup",
    "ensure_dir",
    "expand_path",
]
