"""
User Entity

The identity that authenticates against the platform.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class User(SQLModel, table=True):
    """
    User entity - the identity that authenticates against the platform.

    Business Rules:
    - Email is unique within a tenant
    - Password stored as bcrypt hash; has_password is False for identities
      created through OAuth until a password is set by reset
    - Email verification required before password login succeeds
    - Second-factor secret and recovery codes are Fernet ciphertext; use
      domain.two_factor to read or change them
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    name: str = Field(max_length=255)
    email: str = Field(index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    has_password: bool = Field(default=True)

    email_verified_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Second factor (encrypted at rest)
    two_factor_enabled: bool = Field(default=False)
    two_factor_secret: Optional[str] = Field(default=None)
    two_factor_recovery_codes: Optional[str] = Field(default=None)
    two_factor_confirmed_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_user_tenant_email", "tenant_id", "email", unique=True),
    )

    @property
    def email_verified(self) -> bool:
        return self.email_verified_at is not None
