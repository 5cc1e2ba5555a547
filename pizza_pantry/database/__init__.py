"""
Persistence layer for Pizza Pantry.
"""

from .storage import (
    KeyValueStore,
    MemoryStorage,
    SQLiteStorage,
    StorageError,
    create_storage,
)

__all__ = [
    "KeyValueStore",
    "MemoryStorage",
    "SQLiteStorage",
    "StorageError",
    "create_storage",
]
