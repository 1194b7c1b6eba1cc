"""
Password hashing helpers (bcrypt).
"""

import secrets
from typing import Optional

import bcrypt

from config import ApplicationConfig


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a plain text password with bcrypt"""
    salt = bcrypt.gensalt(rounds or ApplicationConfig.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison of a password against a bcrypt hash"""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed stored hash never authenticates
        return False


def burn_password_check() -> None:
    """Spend one bcrypt round trip so unknown emails take as long as real ones"""
    bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS))


def unusable_password_hash() -> str:
    """Hash of a random value nobody knows, for identities without a password"""
    return hash_password(secrets.token_urlsafe(32))
