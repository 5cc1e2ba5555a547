"""
Audit trail service.

Keeps an append-only, bounded, most-recent-first history of inventory
changes in a single storage blob.
"""

from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from ..database.storage import KeyValueStore, StorageError
from ..models import AuditAction, AuditEntryDraft, AuditLogEntry
from ..utils import get_logger

DEFAULT_STORAGE_KEY = "pizza-pantry-audit-trail"
DEFAULT_MAX_ENTRIES = 1000

_log_adapter = TypeAdapter(List[AuditLogEntry])


class AuditRecorder:
    """Service for recording and reading the audit trail."""

    def __init__(
        self,
        storage: KeyValueStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        max_entries: int = DEFAULT_MAX_ENTRIES
    ) -> None:
        """
        Initialize audit recorder.

        Args:
            storage: Blob storage holding the log
            storage_key: Name of the log blob
            max_entries: Number of most recent entries kept
        """
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.storage = storage
        self.storage_key = storage_key
        self.max_entries = max_entries
        self.logger = get_logger("audit_trail")

    @classmethod
    def from_config(cls, storage: KeyValueStore, config_manager) -> "AuditRecorder":
        """Build a recorder using the ``audit.*`` settings."""
        return cls(
            storage,
            storage_key=config_manager.get("audit.storage_key", DEFAULT_STORAGE_KEY),
            max_entries=config_manager.get("audit.max_entries", DEFAULT_MAX_ENTRIES),
        )

    def append(self, draft: AuditEntryDraft) -> AuditLogEntry:
        """
        Record a new entry at the front of the log.

        Args:
            draft: Entry content without id or timestamp

        Returns:
            The stored AuditLogEntry

        Raises:
            StorageError: If the log cannot be persisted
        """
        entry = AuditLogEntry(**draft.model_dump())

        log = self.get_all()
        log.insert(0, entry)
        if len(log) > self.max_entries:
            del log[self.max_entries:]

        self.storage.set_item(self.storage_key, _log_adapter.dump_json(log).decode("utf-8"))

        self.logger.info(
            f"AUDIT: {entry.action.value} {entry.item_name} ({entry.item_id}) by {entry.user_name}"
        )
        return entry

    def get_all(self) -> List[AuditLogEntry]:
        """
        Get the full log, most recent first.

        Unreadable or malformed data is treated as an empty history.

        Returns:
            List of AuditLogEntry
        """
        try:
            stored = self.storage.get_item(self.storage_key)
        except StorageError as e:
            self.logger.warning(f"Could not read audit log: {e}")
            return []

        if not stored:
            return []

        try:
            return _log_adapter.validate_json(stored)
        except ValidationError as e:
            self.logger.warning(f"Discarding unreadable audit log: {e.error_count()} error(s)")
            return []

    def get_for_item(self, item_id: str) -> List[AuditLogEntry]:
        """
        Get history for an item.

        Args:
            item_id: Item ID

        Returns:
            Entries for the item, most recent first
        """
        return [entry for entry in self.get_all() if entry.item_id == item_id]

    def search(
        self,
        term: str = "",
        action: Optional[AuditAction] = None
    ) -> List[AuditLogEntry]:
        """
        Filter the log by free text and action.

        Args:
            term: Case-insensitive text matched against item name, user name,
                reason and details
            action: Only keep entries with this action

        Returns:
            Matching entries, most recent first
        """
        needle = term.strip().lower()
        results = []
        for entry in self.get_all():
            if action is not None and entry.action != action:
                continue
            if needle:
                haystack = [entry.item_name, entry.user_name, entry.reason or "", entry.details or ""]
                if not any(needle in value.lower() for value in haystack):
                    continue
            results.append(entry)
        return results

    def clear(self) -> None:
        """Remove all persisted history."""
        self.storage.remove_item(self.storage_key)
        self.logger.info("Audit log cleared")
