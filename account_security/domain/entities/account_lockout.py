"""
AccountLockout Entity

Failed-login counter and lock state of one user.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel


class AccountLockout(SQLModel, table=True):
    """
    AccountLockout entity - failed-login counter and lock state of one user.

    Business Rules:
    - One row per user, created lazily on the first login attempt
    - locked_until in the future means the account is locked
    - failed_attempts resets only on successful login or explicit unlock
    - Never deleted
    """

    __tablename__ = "account_lockouts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", unique=True, index=True)

    failed_attempts: int = Field(default=0)
    locked_until: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    last_attempt_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    def is_locked(self, now: datetime) -> bool:
        return self.locked_until is not None and self.locked_until > now
