"""
Configuration package for Pizza Pantry.
"""

from .config_manager import (
    DEFAULT_CONFIG,
    ConfigManager,
    get_config_manager,
    reset_config_manager,
)

__all__ = ["DEFAULT_CONFIG", "ConfigManager", "get_config_manager", "reset_config_manager"]
