"""
Tests for the key-value blob storage backends.
"""

import sqlite3

import pytest

from pizza_pantry.database import MemoryStorage, SQLiteStorage, StorageError, create_storage
from pizza_pantry.utils import generate_encryption_key


@pytest.fixture(params=["memory", "sqlite"])
def backend(request, tmp_path):
    if request.param == "memory":
        return MemoryStorage()
    return SQLiteStorage(str(tmp_path / "data" / "pantry.db"))


def test_set_get_remove(backend):
    assert backend.get_item("inventory") is None

    backend.set_item("inventory", "[1]")
    backend.set_item("inventory", "[1, 2]")
    backend.set_item("audit", "[]")

    assert backend.get_item("inventory") == "[1, 2]"
    assert sorted(backend.keys()) == ["audit", "inventory"]

    backend.remove_item("inventory")
    backend.remove_item("never-stored")

    assert backend.get_item("inventory") is None
    assert backend.keys() == ["audit"]


def test_clear_removes_everything(backend):
    backend.set_item("a", "1")
    backend.set_item("b", "2")

    backend.clear()

    assert backend.keys() == []


def test_sqlite_persists_across_instances(tmp_path):
    path = str(tmp_path / "pantry.db")
    SQLiteStorage(path).set_item("current-user", '{"id": "1"}')

    assert SQLiteStorage(path).get_item("current-user") == '{"id": "1"}'


def test_encrypted_blobs_are_unreadable_at_rest(tmp_path):
    path = tmp_path / "pantry.db"
    key = generate_encryption_key()
    storage = SQLiteStorage(str(path), encryption_key=key)

    storage.set_item("inventory", '[{"name": "Mozzarella"}]')

    with sqlite3.connect(str(path)) as conn:
        raw = conn.execute("SELECT value FROM kv_store WHERE key = 'inventory'").fetchone()[0]
    assert "Mozzarella" not in raw
    assert storage.get_item("inventory") == '[{"name": "Mozzarella"}]'


def test_wrong_key_raises_storage_error():
    storage = MemoryStorage(encryption_key=generate_encryption_key())
    storage.set_item("inventory", "[]")

    storage.encryption_key = generate_encryption_key()

    with pytest.raises(StorageError):
        storage.get_item("inventory")


def test_memory_quota_rejects_oversized_write_and_keeps_old_value():
    storage = MemoryStorage(quota=30)
    storage.set_item("inventory", "[1]")

    with pytest.raises(StorageError, match="quota"):
        storage.set_item("inventory", "x" * 40)

    assert storage.get_item("inventory") == "[1]"


def test_memory_quota_counts_replaced_value_once():
    storage = MemoryStorage(quota=20)
    storage.set_item("k", "x" * 15)
    storage.set_item("k", "y" * 15)

    assert storage.get_item("k") == "y" * 15


def test_sqlite_errors_are_wrapped(tmp_path):
    storage = SQLiteStorage(str(tmp_path / "pantry.db"))
    with storage.get_connection() as conn:
        conn.execute("DROP TABLE kv_store")

    with pytest.raises(StorageError):
        storage.get_item("inventory")


def test_create_storage_uses_config(config):
    config.set("storage.path", "data/custom.db")
    config.set("storage.encrypted", True)

    storage = create_storage(config)

    assert isinstance(storage, SQLiteStorage)
    assert str(storage.db_path).endswith("custom.db")
    assert storage.is_encrypted
