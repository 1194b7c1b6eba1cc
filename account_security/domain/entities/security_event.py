"""
SecurityEvent Entity

Append-only log of security-relevant account activity.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from .enums import SecurityEventType


class SecurityEvent(SQLModel, table=True):
    """
    SecurityEvent entity - append-only log of security-relevant account activity.

    Business Rules:
    - Immutable (never updated or deleted by normal flows)
    - user_id/tenant_id nullable for events recorded before identity resolution
    - Metadata stores additional context (attempt counts, provider, ...)
    """

    __tablename__ = "security_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: Optional[UUID] = Field(default=None)
    tenant_id: Optional[UUID] = Field(default=None)

    event_type: SecurityEventType = Field(nullable=False)
    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = Field(default=None)
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_security_event_user_created", "user_id", "created_at"),
        Index("idx_security_event_type_created", "event_type", "created_at"),
    )
