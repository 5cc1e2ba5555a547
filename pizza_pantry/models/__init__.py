"""
Data models for Pizza Pantry.

This module exports all data models for easy import.
"""

from .audit_log import (
    AuditAction,
    AuditEntryDraft,
    AuditLogEntry,
)
from .inventory import (
    InventoryFilters,
    InventoryItem,
    InventoryItemData,
    QuantityAdjustmentData,
    SortDirection,
    SortField,
    StatusFilter,
    StockStatus,
)
from .user import ANONYMOUS_USER, User

__all__ = [
    # Inventory models
    "InventoryItem",
    "InventoryItemData",
    "QuantityAdjustmentData",
    "InventoryFilters",
    "SortField",
    "SortDirection",
    "StatusFilter",
    "StockStatus",
    # Audit log models
    "AuditAction",
    "AuditEntryDraft",
    "AuditLogEntry",
    # User models
    "User",
    "ANONYMOUS_USER",
]
