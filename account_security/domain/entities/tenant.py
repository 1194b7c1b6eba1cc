"""
Tenant Entity

Organization an identity belongs to.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel


class Tenant(SQLModel, table=True):
    """
    Tenant entity - organization an identity belongs to.

    Only the fields authentication needs: registration checks the tenant
    exists and OAuth sign-up resolves or creates the default tenant.
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
