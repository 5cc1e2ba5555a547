"""
Inventory service for managing pizza kitchen stock.

Owns the authoritative item collection. Every mutation re-persists the whole
collection and then records an audit entry; the two writes are independent.
"""

import math
import uuid
from datetime import datetime
from typing import Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError

from ..database.seed_data import demo_inventory
from ..database.storage import KeyValueStore, StorageError
from ..models import (
    ANONYMOUS_USER,
    AuditAction,
    AuditEntryDraft,
    AuditLogEntry,
    InventoryItem,
    InventoryItemData,
    QuantityAdjustmentData,
    User,
)
from ..utils import get_logger
from .audit_trail import AuditRecorder

DEFAULT_STORAGE_KEY = "pizza-pantry-inventory"

_items_adapter = TypeAdapter(List[InventoryItem])


def serialize_items(items: Iterable[InventoryItem]) -> str:
    """Serialize a collection to the JSON blob format."""
    return _items_adapter.dump_json(list(items)).decode("utf-8")


def deserialize_items(blob: str) -> List[InventoryItem]:
    """
    Parse a JSON blob back into items.

    Raises:
        pydantic.ValidationError: If the blob is not a valid item array
    """
    return _items_adapter.validate_json(blob)


class InventoryStore:
    """Service for managing inventory items and their audit trail."""

    def __init__(
        self,
        storage: KeyValueStore,
        audit: AuditRecorder,
        identity=None,
        storage_key: str = DEFAULT_STORAGE_KEY,
        seed_demo_data: bool = True
    ) -> None:
        """
        Initialize inventory store.

        Args:
            storage: Blob storage holding the collection
            audit: Recorder receiving one entry per mutation
            identity: Object with ``get_current_user()`` naming the actor
                (usually AuthService); None attributes changes to Anonymous
            storage_key: Name of the collection blob
            seed_demo_data: Seed demo items when nothing usable is stored
        """
        self.storage = storage
        self.audit = audit
        self.identity = identity
        self.storage_key = storage_key
        self.seed_demo_data = seed_demo_data
        self.logger = get_logger("inventory_service")
        self._items: List[InventoryItem] = []

    @classmethod
    def from_config(
        cls,
        storage: KeyValueStore,
        audit: AuditRecorder,
        identity,
        config_manager
    ) -> "InventoryStore":
        """Build a store using the ``inventory.*`` settings."""
        return cls(
            storage,
            audit,
            identity=identity,
            storage_key=config_manager.get("inventory.storage_key", DEFAULT_STORAGE_KEY),
            seed_demo_data=config_manager.get("inventory.seed_demo_data", True),
        )

    # Lifecycle

    def load(self) -> List[InventoryItem]:
        """
        Load the persisted collection, seeding it when nothing usable is stored.

        Returns:
            The loaded collection

        Raises:
            StorageError: If a seeded collection cannot be persisted
        """
        items: List[InventoryItem] = []
        try:
            stored = self.storage.get_item(self.storage_key)
            if stored:
                items = deserialize_items(stored)
        except (StorageError, ValidationError) as e:
            self.logger.error(f"Error loading inventory: {e}")

        if items:
            self._items = items
            self.logger.info(f"Loaded {len(items)} inventory items")
        elif self.seed_demo_data:
            self._items = demo_inventory()
            self._persist()
            self.logger.info(f"Seeded {len(self._items)} demo inventory items")
        else:
            self._items = []

        return self.items

    def _persist(self) -> None:
        self.storage.set_item(self.storage_key, serialize_items(self._items))

    # Queries

    @property
    def items(self) -> List[InventoryItem]:
        """Copy of the collection in insertion order."""
        return list(self._items)

    def get_item(self, item_id: str) -> Optional[InventoryItem]:
        """
        Get an inventory item by ID.

        Returns:
            InventoryItem or None if not found
        """
        index = self._index(item_id)
        return self._items[index] if index is not None else None

    def categories(self) -> List[str]:
        """Unique categories, sorted."""
        return sorted({item.category for item in self._items})

    def low_stock_items(self) -> List[InventoryItem]:
        """Items below their reorder threshold, lowest quantity first."""
        return sorted(
            (item for item in self._items if item.is_low_stock()),
            key=lambda item: item.quantity,
        )

    def history(self, item_id: str) -> List[AuditLogEntry]:
        """Audit entries for an item, most recent first."""
        return self.audit.get_for_item(item_id)

    def _index(self, item_id: str) -> Optional[int]:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        return None

    def _actor(self) -> User:
        user = self.identity.get_current_user() if self.identity is not None else None
        if user is None:
            self.logger.warning("No signed-in user; attributing change to anonymous")
            return ANONYMOUS_USER
        return user

    def _record(self, item: InventoryItem, action: AuditAction, **fields) -> AuditLogEntry:
        return self.audit.append(
            AuditEntryDraft.snapshot(item, self._actor(), action, **fields)
        )

    # Mutations

    def add_item(self, data: InventoryItemData) -> InventoryItem:
        """
        Create a new inventory item.

        Args:
            data: Validated item payload

        Returns:
            The created InventoryItem
        """
        now = datetime.now()
        item = InventoryItem(**data.item_fields(), created_at=now, updated_at=now)

        self._items = self._items + [item]
        self._persist()
        self._record(item, AuditAction.CREATED, details=f"Created {item.name}")

        self.logger.info(f"Created inventory item: {item.name} ({item.id})")
        return item

    def edit_item(self, item_id: str, data: InventoryItemData) -> Optional[InventoryItem]:
        """
        Replace the mutable fields of an existing item.

        Args:
            item_id: Item ID
            data: Validated item payload

        Returns:
            The updated InventoryItem, or None if not found
        """
        index = self._index(item_id)
        if index is None:
            self.logger.warning(f"Edit skipped, item not found: {item_id}")
            return None

        updated = self._items[index].model_copy(
            update={**data.item_fields(), "updated_at": datetime.now()}
        )
        self._items = self._items[:index] + [updated] + self._items[index + 1:]
        self._persist()
        self._record(updated, AuditAction.UPDATED, details=f"Updated {updated.name}")

        self.logger.info(f"Updated inventory item: {updated.name} ({item_id})")
        return updated

    def delete_item(self, item_id: str) -> bool:
        """
        Delete an inventory item.

        Args:
            item_id: Item ID

        Returns:
            True if deleted, False if not found
        """
        index = self._index(item_id)
        if index is None:
            self.logger.warning(f"Delete skipped, item not found: {item_id}")
            return False

        item = self._items[index]
        self._items = self._items[:index] + self._items[index + 1:]
        self._persist()
        self._record(item, AuditAction.DELETED, details=f"Deleted {item.name}")

        self.logger.info(f"Deleted inventory item: {item.name} ({item_id})")
        return True

    def adjust_quantity(
        self,
        item_id: str,
        adjustment: float,
        reason: str
    ) -> Optional[InventoryItem]:
        """
        Apply a signed quantity change.

        The result is clamped at zero. The audit entry keeps the requested
        adjustment, not the clamped effect.

        Args:
            item_id: Item ID
            adjustment: Signed delta (validated as non-zero by the caller)
            reason: Why the stock changed (validated as non-empty by the caller)

        Returns:
            The updated InventoryItem, or None if not found

        Raises:
            ValueError: If adjustment is infinite or NaN
        """
        if not math.isfinite(adjustment):
            raise ValueError(f"Adjustment must be a finite number, got {adjustment}")

        index = self._index(item_id)
        if index is None:
            self.logger.warning(f"Adjustment skipped, item not found: {item_id}")
            return None

        current = self._items[index]
        previous_quantity = current.quantity
        new_quantity = max(0.0, previous_quantity + adjustment)

        updated = current.model_copy(
            update={"quantity": new_quantity, "updated_at": datetime.now()}
        )
        self._items = self._items[:index] + [updated] + self._items[index + 1:]
        self._persist()
        self._record(
            updated,
            AuditAction.QUANTITY_ADJUSTED,
            previous_quantity=previous_quantity,
            new_quantity=new_quantity,
            adjustment=adjustment,
            reason=reason,
        )

        self.logger.info(
            f"Adjusted {updated.name} ({item_id}): {previous_quantity:g} -> {new_quantity:g} ({reason})"
        )
        return updated

    def apply_adjustment(self, request: QuantityAdjustmentData) -> Optional[InventoryItem]:
        """Apply a validated adjustment request."""
        return self.adjust_quantity(request.item_id, request.adjustment, request.reason)

    def bulk_delete(self, item_ids: Iterable[str]) -> int:
        """
        Delete several items, auditing each one.

        Args:
            item_ids: Item IDs; unknown IDs are skipped

        Returns:
            Number of items deleted
        """
        return sum(1 for item_id in item_ids if self.delete_item(item_id))

    def import_items(self, items: Iterable[InventoryItem]) -> List[InventoryItem]:
        """
        Append imported items, auditing each as created.

        Items whose ID already exists get a fresh one.

        Args:
            items: Parsed items (see inventory_transfer)

        Returns:
            The items as stored
        """
        existing = {item.id for item in self._items}
        imported = []
        for item in items:
            if item.id in existing:
                item = item.model_copy(update={"id": str(uuid.uuid4())})
            existing.add(item.id)
            imported.append(item)

        if not imported:
            return []

        self._items = self._items + imported
        self._persist()
        for item in imported:
            self._record(item, AuditAction.CREATED, details="Imported")

        self.logger.info(f"Imported {len(imported)} inventory items")
        return imported
