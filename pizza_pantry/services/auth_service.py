"""
Demo authentication service.

Provides a signed-in/signed-out gate and the identity of the current actor
for audit attribution. The demo accounts are fixed; there are no roles.
"""

from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..database.storage import KeyValueStore, StorageError
from ..models import User
from ..utils import get_logger, hash_password, verify_password

DEFAULT_SESSION_KEY = "current-user"

DEMO_ACCOUNTS: List[Dict[str, str]] = [
    {
        "id": "1",
        "name": "Admin User",
        "email": "admin@pizzapantry.com",
        "password": "admin123",
    },
    {
        "id": "2",
        "name": "Staff User",
        "email": "staff@pizzapantry.com",
        "password": "staff123",
    },
]


class AuthService:
    """Service for signing users in and out."""

    def __init__(
        self,
        storage: KeyValueStore,
        session_key: str = DEFAULT_SESSION_KEY,
        accounts: Optional[List[Dict[str, str]]] = None
    ) -> None:
        """
        Initialize auth service.

        Args:
            storage: Blob storage holding the session
            session_key: Name of the session blob
            accounts: Account records with id, name, email and password
                (defaults to the demo accounts)
        """
        self.storage = storage
        self.session_key = session_key
        self.logger = get_logger("auth_service")

        # Passwords are only kept as salted hashes
        self._accounts: Dict[str, Tuple[User, bytes, bytes]] = {}
        for account in accounts if accounts is not None else DEMO_ACCOUNTS:
            password_hash, salt = hash_password(account["password"])
            user = User(id=account["id"], name=account["name"], email=account["email"])
            self._accounts[account["email"].lower()] = (user, password_hash, salt)

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """
        Check credentials.

        Args:
            email: Account email (case-insensitive)
            password: Plain text password

        Returns:
            Matching User or None
        """
        record = self._accounts.get(email.strip().lower())
        if record is None:
            return None
        user, password_hash, salt = record
        if not verify_password(password, password_hash, salt):
            return None
        return user

    def sign_in(self, email: str, password: str) -> Optional[User]:
        """
        Authenticate and persist the session.

        Returns:
            The signed-in User, or None if the credentials are wrong
        """
        user = self.authenticate(email, password)
        if user is None:
            self.logger.warning(f"Failed sign-in for {email}")
            return None

        self.storage.set_item(self.session_key, user.model_dump_json())
        self.logger.info(f"Signed in: {user.name} ({user.id})")
        return user

    def sign_out(self) -> None:
        """Clear the persisted session."""
        self.storage.remove_item(self.session_key)
        self.logger.info("Signed out")

    def get_current_user(self) -> Optional[User]:
        """
        Get the signed-in user.

        Returns:
            User, or None when nobody is signed in or the session is unreadable
        """
        try:
            stored = self.storage.get_item(self.session_key)
        except StorageError as e:
            self.logger.warning(f"Could not read session: {e}")
            return None

        if not stored:
            return None

        try:
            return User.model_validate_json(stored)
        except ValidationError:
            self.logger.warning("Discarding unreadable session")
            return None

    def is_authenticated(self) -> bool:
        """Check whether someone is signed in."""
        return self.get_current_user() is not None
