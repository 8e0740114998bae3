"""Password hashing and session tokens for admin and student accounts."""

import json
import logging
import os
from typing import Optional

from cryptography.exceptions import InvalidKey
from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from enrollment.config import settings
from enrollment.schemas.enrollment import User
from enrollment.services.enrollment_store import EnrollmentStore

logger = logging.getLogger(__name__)


def _kdf(salt: bytes) -> Scrypt:
    return Scrypt(salt=salt, length=64, n=2**14, r=8, p=1)


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    digest = _kdf(salt).derive(password.encode())
    return f"{digest.hex()}.{salt.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        digest_hex, salt_hex = stored.split(".")
        _kdf(bytes.fromhex(salt_hex)).verify(password.encode(), bytes.fromhex(digest_hex))
        return True
    except (ValueError, InvalidKey):
        return False


class TokenService:
    """Issues Fernet-encrypted session tokens carrying the user id."""

    _instance = None

    def __init__(self, key: str = None, ttl_seconds: int = None):
        key = key if key is not None else settings.encryption_key
        if not key:
            logger.warning("No encryption_key configured, sessions will not survive a restart")
            key = Fernet.generate_key().decode()
        self.fernet = Fernet(key.encode())
        self.ttl_seconds = ttl_seconds or settings.session_ttl_seconds

    @classmethod
    def get_instance(cls) -> "TokenService":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def issue(self, user: User) -> str:
        return self.fernet.encrypt(json.dumps({"user_id": user.id}).encode()).decode()

    def user_id_for(self, token: str) -> Optional[int]:
        try:
            payload = json.loads(self.fernet.decrypt(token.encode(), ttl=self.ttl_seconds))
            return int(payload["user_id"])
        except (InvalidToken, ValueError, KeyError, TypeError):
            return None


def authenticate(store: EnrollmentStore, username: str, password: str) -> Optional[User]:
    user = store.get_user_by_username(username)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def bootstrap_admin(store: EnrollmentStore) -> Optional[User]:
    """Create the configured admin account unless it already exists."""
    if store.get_user_by_username(settings.admin_username):
        return None
    user = store.create_user(settings.admin_username, hash_password(settings.admin_password), is_admin=True)
    logger.info(f"Created default admin user '{user.username}'")
    return user
