"""
Business logic services for Pizza Pantry.
"""

from .audit_trail import AuditRecorder
from .auth_service import AuthService
from .inventory_service import InventoryStore
from .inventory_transfer import InventoryImportError

__all__ = ["AuditRecorder", "AuthService", "InventoryStore", "InventoryImportError"]
