"""
Shared fixtures for Pizza Pantry tests.

Every test runs in its own temporary working directory so config files,
logs and databases never leak between tests.
"""

import pytest

from pizza_pantry.config import get_config_manager, reset_config_manager
from pizza_pantry.database import MemoryStorage
from pizza_pantry.models import InventoryItem, InventoryItemData
from pizza_pantry.services import AuditRecorder, AuthService, InventoryStore
from pizza_pantry.services.inventory_service import serialize_items
from pizza_pantry.utils import reset_loggers

ADMIN_EMAIL = "admin@pizzapantry.com"
ADMIN_PASSWORD = "admin123"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    reset_config_manager()
    reset_loggers()
    yield
    reset_loggers()
    reset_config_manager()


@pytest.fixture
def config():
    return get_config_manager()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def recorder(storage):
    return AuditRecorder(storage)


@pytest.fixture
def auth(storage):
    return AuthService(storage)


@pytest.fixture
def signed_in(auth):
    auth.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)
    return auth


@pytest.fixture
def store(storage, recorder, signed_in):
    inventory = InventoryStore(storage, recorder, identity=signed_in, seed_demo_data=False)
    inventory.load()
    return inventory


@pytest.fixture
def make_data():
    def _make(**overrides) -> InventoryItemData:
        fields = {
            "name": "Mozzarella",
            "category": "Cheese",
            "quantity": 10,
            "unit": "kg",
            "reorder_threshold": 5,
        }
        fields.update(overrides)
        return InventoryItemData(**fields)
    return _make


@pytest.fixture
def preload(storage, store):
    """Replace the store contents with the given items without auditing."""
    def _preload(*items: InventoryItem) -> InventoryStore:
        storage.set_item(store.storage_key, serialize_items(items))
        store.load()
        return store
    return _preload
