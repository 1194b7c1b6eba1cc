"""
Account Security Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    DeviceType,
    OAuthProviderName,
    SecurityEventType,
    TokenPurpose,
)

# Export all entities
from .user import User
from .tenant import Tenant
from .account_lockout import AccountLockout
from .password_history import PasswordHistory
from .security_event import SecurityEvent
from .user_session import UserSession
from .oauth_connection import OAuthConnection
from .ephemeral_token import EphemeralToken

__all__ = [
    # Enums
    "DeviceType",
    "OAuthProviderName",
    "SecurityEventType",
    "TokenPurpose",
    # Entities
    "User",
    "Tenant",
    "AccountLockout",
    "PasswordHistory",
    "SecurityEvent",
    "UserSession",
    "OAuthConnection",
    "EphemeralToken",
]
