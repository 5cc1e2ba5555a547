"""
Key-value blob storage for Pizza Pantry.

Each collection is persisted as one named text blob. Two backends are
provided: a SQLite file for real use and an in-memory store for tests and
throwaway sessions. Blobs may optionally be encrypted at rest with Fernet.
"""

import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, List, Optional

from cryptography.fernet import InvalidToken

from ..utils.encryption import decrypt_text, encrypt_text


class StorageError(Exception):
    """Raised when a blob cannot be read from or written to storage."""


class KeyValueStore(ABC):
    """Abstract base class for named blob storage."""

    def __init__(self, encryption_key: Optional[bytes] = None) -> None:
        """
        Initialize store.

        Args:
            encryption_key: Fernet key; when set, blobs are encrypted at rest
        """
        self.encryption_key = encryption_key

    @property
    def is_encrypted(self) -> bool:
        return self.encryption_key is not None

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        """Return the raw stored value for key, or None."""
        pass

    @abstractmethod
    def _write(self, key: str, value: str) -> None:
        """Store the raw value under key, replacing any previous value."""
        pass

    @abstractmethod
    def _delete(self, key: str) -> None:
        """Remove key if present."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """List stored keys."""
        pass

    def get_item(self, key: str) -> Optional[str]:
        """
        Read a blob.

        Args:
            key: Blob name

        Returns:
            Stored text, or None if nothing is stored under key

        Raises:
            StorageError: If the backend fails or the blob cannot be decrypted
        """
        raw = self._read(key)
        if raw is None or not self.is_encrypted:
            return raw
        try:
            return decrypt_text(raw, self.encryption_key)
        except (InvalidToken, UnicodeError) as e:
            raise StorageError(f"Cannot decrypt blob '{key}'") from e

    def set_item(self, key: str, value: str) -> None:
        """
        Write a blob, replacing the previous value.

        Raises:
            StorageError: If the backend rejects the write
        """
        if self.is_encrypted:
            value = encrypt_text(value, self.encryption_key)
        self._write(key, value)

    def remove_item(self, key: str) -> None:
        """Remove a blob; missing keys are ignored."""
        self._delete(key)

    def clear(self) -> None:
        """Remove every blob."""
        for key in self.keys():
            self._delete(key)


class MemoryStorage(KeyValueStore):
    """
    Dictionary-backed store.

    An optional quota (in characters, keys included) mimics the size limit
    of browser storage; writes that would exceed it raise StorageError and
    leave the previous value in place.
    """

    def __init__(
        self,
        quota: Optional[int] = None,
        encryption_key: Optional[bytes] = None
    ) -> None:
        super().__init__(encryption_key)
        self.quota = quota
        self._data: Dict[str, str] = {}

    def _usage(self, exclude: Optional[str] = None) -> int:
        return sum(len(k) + len(v) for k, v in self._data.items() if k != exclude)

    def _read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write(self, key: str, value: str) -> None:
        if self.quota is not None:
            needed = self._usage(exclude=key) + len(key) + len(value)
            if needed > self.quota:
                raise StorageError(
                    f"Storage quota exceeded writing '{key}' ({needed} > {self.quota})"
                )
        self._data[key] = value

    def _delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)


class SQLiteStorage(KeyValueStore):
    """
    SQLite-backed store.

    Blobs live in a single ``kv_store`` table; a connection is opened per call.
    """

    SCHEMA = """
        CREATE TABLE IF NOT EXISTS kv_store (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
    """

    def __init__(self, db_path: str, encryption_key: Optional[bytes] = None) -> None:
        """
        Initialize SQLite storage.

        Args:
            db_path: Path to the database file
            encryption_key: Fernet key for encrypting blobs (None stores plain text)
        """
        super().__init__(encryption_key)
        self.db_path = Path(db_path)

        # Ensure database directory exists
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.initialize()

    @contextmanager
    def get_connection(self):
        """
        Context manager for database connections.

        Yields:
            Database connection object

        Raises:
            StorageError: Wrapping any sqlite3 error
        """
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open storage at {self.db_path}: {e}") from e

        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StorageError(f"Storage operation failed: {e}") from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create the blob table if it doesn't exist."""
        with self.get_connection() as conn:
            conn.execute(self.SCHEMA)

    def _read(self, key: str) -> Optional[str]:
        with self.get_connection() as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        return row[0] if row else None

    def _write(self, key: str, value: str) -> None:
        with self.get_connection() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )

    def _delete(self, key: str) -> None:
        with self.get_connection() as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))

    def keys(self) -> List[str]:
        with self.get_connection() as conn:
            rows = conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        return [row[0] for row in rows]


def create_storage(config_manager=None) -> KeyValueStore:
    """
    Create the configured storage backend.

    Args:
        config_manager: ConfigManager instance (defaults to the global one)

    Returns:
        SQLiteStorage at ``storage.path``
    """
    if config_manager is None:
        from ..config import get_config_manager
        config_manager = get_config_manager()

    db_path = config_manager.get("storage.path", "data/pizza_pantry.db")
    return SQLiteStorage(db_path, encryption_key=config_manager.get_storage_encryption_key())
