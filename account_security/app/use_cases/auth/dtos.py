"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from account_security.domain.entities import SecurityEventType, User


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """Business intent to register a new identity in a tenant"""

    tenant_id: UUID
    name: str
    email: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Public identity information in authentication responses"""

    id: str
    tenant_id: str
    name: str
    email: str
    email_verified: bool
    two_factor_enabled: bool

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            tenant_id=str(user.tenant_id),
            name=user.name,
            email=user.email,
            email_verified=user.email_verified,
            two_factor_enabled=user.two_factor_enabled,
        )


class RegisterResponse(BaseModel):
    """Response for registration use case"""

    user: UserInfo
    message: str


class LoginResponse(BaseModel):
    """
    Response for login and two-factor verification.

    status is "authenticated" (token fields set) or "two_factor_required"
    (challenge_token set).
    """

    status: str
    access_token: Optional[str] = None
    token_type: Optional[str] = None
    session_id: Optional[str] = None
    user: Optional[UserInfo] = None
    challenge_token: Optional[str] = None
    reprovision_recommended: bool = False
    recovery_codes_remaining: Optional[int] = None


class ChangePasswordResponse(BaseModel):
    """Response for change password use case"""

    status: str
    message: str
    sessions_revoked: int


class SecurityEventInfo(BaseModel):
    id: str
    event_type: SecurityEventType
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: datetime


class SecurityEventsResponse(BaseModel):
    events: List[SecurityEventInfo]
