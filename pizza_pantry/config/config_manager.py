"""
Configuration management for Pizza Pantry.

Settings are kept in ``config/app_config.json``. The Fernet key used when
storage encryption is switched on lives next to it in ``config/.key``.
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from cryptography.fernet import Fernet

DEFAULT_CONFIG: Dict[str, Any] = {
    "app_version": "0.1.0",
    "storage": {
        "path": "data/pizza_pantry.db",
        "encrypted": False,
    },
    "inventory": {
        "storage_key": "pizza-pantry-inventory",
        "seed_demo_data": True,
    },
    "audit": {
        "storage_key": "pizza-pantry-audit-trail",
        "max_entries": 1000,
    },
    "auth": {
        "session_key": "current-user",
    },
    "dashboard": {
        "low_stock_alert_limit": 5,
    },
    "logging": {
        "level": "INFO",
        "max_file_size_mb": 10,
        "backup_count": 5,
        "log_dir": "logs",
    },
}


def _merge_defaults(defaults: Dict[str, Any], saved: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for key, value in saved.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_defaults(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """
    Pantry settings backed by a JSON file.

    Values are addressed with dot notation ("audit.max_entries"). Sections
    missing from an older config file are filled in from DEFAULT_CONFIG.
    """

    def __init__(self, config_dir: str = "config") -> None:
        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.config_file = self.config_dir / "app_config.json"
        self.key_file = self.config_dir / ".key"
        self.config: Dict[str, Any] = {}

        self.encryption_key = self._load_or_create_key()
        self.load_config()

    def _load_or_create_key(self) -> bytes:
        if self.key_file.exists():
            return self.key_file.read_bytes()

        key = Fernet.generate_key()
        self.key_file.write_bytes(key)
        # Owner-only access (Unix-like systems)
        if os.name != 'nt':
            os.chmod(self.key_file, 0o600)
        return key

    def load_config(self) -> None:
        """Read the config file, creating it with defaults on first run."""
        if not self.config_file.exists():
            self.config = copy.deepcopy(DEFAULT_CONFIG)
            self.save_config()
            return

        with open(self.config_file, 'r', encoding='utf-8') as f:
            self.config = _merge_defaults(DEFAULT_CONFIG, json.load(f))

    def save_config(self) -> None:
        """Write the current settings back to disk."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self.config, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a setting.

        Args:
            key: Dotted path, e.g. "inventory.storage_key"
            default: Returned when any part of the path is missing

        Returns:
            Setting value
        """
        node: Any = self.config
        for part in key.split('.'):
            if not isinstance(node, dict) or node.get(part) is None:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any, save: bool = True) -> None:
        """
        Change a setting, creating intermediate sections as needed.

        Args:
            key: Dotted path
            value: New value
            save: Write the file immediately
        """
        *parents, leaf = key.split('.')
        node = self.config
        for part in parents:
            node = node.setdefault(part, {})
        node[leaf] = value

        if save:
            self.save_config()

    def get_storage_encryption_key(self) -> Optional[bytes]:
        """Key for sealing storage blobs, or None while encryption is off."""
        if self.get("storage.encrypted", False):
            return self.encryption_key
        return None

    def reset_to_defaults(self) -> None:
        """Discard all changes and restore DEFAULT_CONFIG."""
        self.config = copy.deepcopy(DEFAULT_CONFIG)
        self.save_config()


# Global configuration instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Return the process-wide ConfigManager, creating it on first use."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def reset_config_manager() -> None:
    """Forget the global configuration manager (mainly for testing)."""
    global _config_manager
    _config_manager = None
