"""
Logging setup for Pizza Pantry.

Everything logs under the ``pizza_pantry`` logger. The full record goes to a
size-rotated file in ``logging.log_dir``; the configured level and above is
echoed to stderr; stdout carries command output only.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from ..config.config_manager import get_config_manager

ROOT_LOGGER_NAME = "pizza_pantry"

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
CONSOLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class PantryLogger:
    """
    Owns the handlers attached to the package root logger.

    Module loggers are children of the root and inherit its handlers.
    """

    def __init__(self, log_dir: Optional[str] = None, log_file: str = "pizza_pantry.log") -> None:
        config = get_config_manager()

        self.log_dir = Path(log_dir or config.get("logging.log_dir", "logs"))
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = self.log_dir / log_file

        level_name = str(config.get("logging.level", "INFO")).upper()
        self.level = logging.getLevelName(level_name)
        if not isinstance(self.level, int):
            self.level = logging.INFO

        self.logger = logging.getLogger(ROOT_LOGGER_NAME)
        self.logger.setLevel(self.level)
        self.close()

        rotating = RotatingFileHandler(
            self.log_file,
            maxBytes=int(config.get("logging.max_file_size_mb", 10)) * 1024 * 1024,
            backupCount=int(config.get("logging.backup_count", 5)),
            encoding='utf-8'
        )
        rotating.setLevel(logging.DEBUG)
        rotating.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))

        console = logging.StreamHandler(sys.stderr)
        console.setLevel(self.level)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))

        self.logger.addHandler(rotating)
        self.logger.addHandler(console)

    def close(self) -> None:
        """Detach and close every handler on the root logger."""
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()


# Global logger instance
_logger: Optional[PantryLogger] = None


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get the package logger or one of its children.

    Args:
        name: Child name such as "inventory_service"; omit for the root

    Returns:
        Logger instance
    """
    global _logger
    if _logger is None:
        _logger = PantryLogger()
    if not name or name == ROOT_LOGGER_NAME:
        return _logger.logger
    return _logger.logger.getChild(name)


def reset_loggers() -> None:
    """Close handlers and drop the global logger (mainly for testing)."""
    global _logger
    if _logger is not None:
        _logger.close()
    _logger = None
