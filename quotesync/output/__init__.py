# quotesync Output Module
# Rich-based console output

from quotesync.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
