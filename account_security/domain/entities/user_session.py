"""
UserSession Entity

Backing record of an issued bearer token on one device.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class UserSession(SQLModel, table=True):
    """
    UserSession entity - backing record of an issued bearer token on one device.

    Business Rules:
    - Bearer tokens are opaque; only their SHA-256 digest is stored
    - A token is valid only while its session is active
    - expires_at NULL means non-expiring until revoked
    - Revocation sets expires_at to now
    """

    __tablename__ = "user_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    token_hash: str = Field(unique=True, index=True, max_length=64)  # SHA-256 hex

    device_name: Optional[str] = Field(default=None, max_length=255)
    device_type: Optional[str] = Field(default=None, max_length=20)
    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = Field(default=None)

    # Timestamps
    last_activity_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_user_session_user_activity", "user_id", "last_activity_at"),
    )

    def is_active(self, now: datetime) -> bool:
        return self.expires_at is None or self.expires_at > now
