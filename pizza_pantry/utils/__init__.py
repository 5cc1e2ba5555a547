"""
Utility functions for Pizza Pantry.
"""

from .encryption import (
    decrypt_text,
    encrypt_text,
    generate_encryption_key,
    hash_password,
    verify_password,
)
from .logger import (
    PantryLogger,
    get_logger,
    reset_loggers,
)

__all__ = [
    # Encryption
    "generate_encryption_key",
    "encrypt_text",
    "decrypt_text",
    "hash_password",
    "verify_password",
    # Logging
    "PantryLogger",
    "get_logger",
    "reset_loggers",
]
