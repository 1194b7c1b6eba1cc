"""
OAuthConnection Entity

Link between a local identity and an account at a third-party provider.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel


class OAuthConnection(SQLModel, table=True):
    """
    OAuthConnection entity - link between a local identity and a provider account.

    Business Rules:
    - (provider, provider_user_id) is globally unique
    - provider_data is a snapshot of the provider profile, refreshed on login
    - A user keeps at least one authentication method when disconnecting
    """

    __tablename__ = "oauth_connections"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False)

    provider: str = Field(max_length=50)
    provider_user_id: str = Field(max_length=255)
    provider_email: Optional[str] = Field(default=None, max_length=255)
    provider_data: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    connected_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index(
            "idx_oauth_provider_user", "provider", "provider_user_id", unique=True
        ),
    )
