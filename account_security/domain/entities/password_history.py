"""
PasswordHistory Entity

Previous password hashes kept for reuse detection.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class PasswordHistory(SQLModel, table=True):
    """
    PasswordHistory entity - previous password hashes kept for reuse detection.

    Business Rules:
    - At most PASSWORD_HISTORY_DEPTH entries per user, oldest pruned on insert
    - Never used to authenticate
    - sequence breaks ties between entries created in the same instant
    """

    __tablename__ = "password_histories"

    sequence: Optional[int] = Field(default=None, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False)
    password_hash: str = Field(max_length=60)

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_password_history_user_created", "user_id", "created_at"),)
