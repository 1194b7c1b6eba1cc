"""
EphemeralToken Entity

Single-use, time-bounded tokens for password reset and email verification.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import TokenPurpose


class EphemeralToken(SQLModel, table=True):
    """
    EphemeralToken entity - single-use, time-bounded token.

    Business Rules:
    - At most one live token per (subject_key, purpose); issuing replaces it
    - Token is stored as SHA-256 hash of a secure random string
    - Deleted on successful use, so it cannot be replayed
    - Expires after 1 hour (reset) or 24 hours (verify-email)
    """

    __tablename__ = "ephemeral_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    subject_key: str = Field(max_length=255)
    purpose: TokenPurpose = Field(nullable=False)
    token_hash: str = Field(max_length=64)  # SHA-256 output

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_ephemeral_subject_purpose", "subject_key", "purpose", unique=True),
        Index("idx_ephemeral_expires_at", "expires_at"),
    )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
