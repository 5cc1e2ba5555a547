"""
Encryption helpers for Pizza Pantry.

Storage blobs are sealed with Fernet and demo account passwords are kept
only as PBKDF2 hashes.
"""

import os
from typing import Optional, Tuple

from cryptography.exceptions import InvalidKey
from cryptography.fernet import Fernet
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

PASSWORD_ITERATIONS = 100_000
SALT_BYTES = 32


def generate_encryption_key() -> bytes:
    """Generate a new Fernet key for sealing storage blobs."""
    return Fernet.generate_key()


def encrypt_text(text: str, key: bytes) -> str:
    """
    Seal a text blob.

    Args:
        text: Plain text (usually a JSON document)
        key: Fernet key

    Returns:
        URL-safe token text, safe to store in a TEXT column
    """
    return Fernet(key).encrypt(text.encode("utf-8")).decode("ascii")


def decrypt_text(token: str, key: bytes) -> str:
    """
    Open a blob sealed by encrypt_text.

    Raises:
        cryptography.fernet.InvalidToken: If the token was sealed with another
            key or has been tampered with
    """
    return Fernet(key).decrypt(token.encode("ascii")).decode("utf-8")


def _password_kdf(salt: bytes) -> PBKDF2HMAC:
    return PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=PASSWORD_ITERATIONS,
    )


def hash_password(password: str, salt: Optional[bytes] = None) -> Tuple[bytes, bytes]:
    """
    Derive a password hash.

    Args:
        password: Plain password
        salt: Salt to reuse; a fresh one is generated when omitted

    Returns:
        Tuple of (password_hash, salt)
    """
    if salt is None:
        salt = os.urandom(SALT_BYTES)
    return _password_kdf(salt).derive(password.encode("utf-8")), salt


def verify_password(password: str, password_hash: bytes, salt: bytes) -> bool:
    """Check a plain password against a stored hash and salt."""
    try:
        _password_kdf(salt).verify(password.encode("utf-8"), password_hash)
    except InvalidKey:
        return False
    return True
