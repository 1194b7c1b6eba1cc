"""
Account Security Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class SecurityEventType(str, Enum):
    """Kinds of security events recorded in the audit log"""

    login_success = "login_success"
    login_failed = "login_failed"
    account_locked = "account_locked"
    account_unlocked = "account_unlocked"
    password_changed = "password_changed"
    password_reset_requested = "password_reset_requested"
    password_reset_completed = "password_reset_completed"
    user_registered = "user_registered"
    email_verified = "email_verified"
    two_factor_enabled = "two_factor_enabled"
    two_factor_disabled = "two_factor_disabled"
    two_factor_recovery_used = "two_factor_recovery_used"
    recovery_codes_regenerated = "recovery_codes_regenerated"
    oauth_connected = "oauth_connected"
    oauth_disconnected = "oauth_disconnected"
    session_revoked = "session_revoked"
    sessions_revoked = "sessions_revoked"


class TokenPurpose(str, Enum):
    """What an ephemeral token may be used for"""

    reset = "reset"
    verify_email = "verify-email"


class OAuthProviderName(str, Enum):
    """Allow-listed third-party identity providers"""

    google = "google"
    github = "github"
    microsoft = "microsoft"


class DeviceType(str, Enum):
    """Coarse device classification of a session"""

    web = "web"
    mobile = "mobile"
    desktop = "desktop"
