"""
Audit log data models.

Audit entries are immutable snapshots: the item and actor identity are
copied by value when the event happens, so later renames or deletions never
rewrite history.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .inventory import InventoryItem, to_naive_local
from .user import User


class AuditAction(str, Enum):
    """Types of inventory actions that are logged."""
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    QUANTITY_ADJUSTED = "quantity_adjusted"


class AuditEntryDraft(BaseModel):
    """An audit entry before the recorder assigns its id and timestamp."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    # camelCase spellings are accepted for logs written by older versions
    item_id: str = Field(validation_alias=AliasChoices("item_id", "itemId"))
    item_name: str = Field(validation_alias=AliasChoices("item_name", "itemName"))
    action: AuditAction
    previous_quantity: Optional[float] = Field(
        None, validation_alias=AliasChoices("previous_quantity", "previousQuantity")
    )
    new_quantity: Optional[float] = Field(
        None, validation_alias=AliasChoices("new_quantity", "newQuantity")
    )
    adjustment: Optional[float] = None
    reason: Optional[str] = None
    user_id: str = Field(validation_alias=AliasChoices("user_id", "userId"))
    user_name: str = Field(validation_alias=AliasChoices("user_name", "userName"))
    details: Optional[str] = None

    @classmethod
    def snapshot(
        cls,
        item: InventoryItem,
        user: User,
        action: AuditAction,
        **fields
    ) -> "AuditEntryDraft":
        """
        Capture item and actor identity as they are right now.

        Args:
            item: Affected item
            user: Actor performing the action
            action: Action being recorded
            **fields: Action-specific fields (quantities, reason, details)

        Returns:
            AuditEntryDraft holding copies, not references
        """
        return cls(
            item_id=item.id,
            item_name=item.name,
            action=action,
            user_id=user.id,
            user_name=user.name,
            **fields,
        )


class AuditLogEntry(AuditEntryDraft):
    """One immutable record of an inventory-affecting action."""

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        validation_alias=AliasChoices("id", "_id"),
    )
    timestamp: datetime = Field(default_factory=datetime.now)

    @field_validator("timestamp")
    @classmethod
    def to_local_time(cls, v: datetime) -> datetime:
        return to_naive_local(v)

    def describe(self) -> str:
        """Short human-readable summary, as shown in the audit table."""
        if self.action == AuditAction.QUANTITY_ADJUSTED:
            sign = "+" if (self.adjustment or 0) > 0 else ""
            return (
                f"{_fmt(self.previous_quantity)} -> {_fmt(self.new_quantity)} "
                f"({sign}{_fmt(self.adjustment)}): {self.reason}"
            )
        return self.details or f"Item {self.action.value}"

    def to_readable_string(self) -> str:
        """Convert log entry to human-readable string."""
        timestamp_str = self.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        action_str = self.action.value.replace("_", " ").title()
        return f"[{timestamp_str}] {self.user_name}: {action_str} {self.item_name} - {self.describe()}"


def _fmt(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:g}"
