from typing import List
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from account_security.app.repositories.security_event_repository import (
    ISecurityEventRepository,
)
from account_security.domain.entities import SecurityEvent


class SecurityEventRepository(ISecurityEventRepository):
    """SecurityEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, event: SecurityEvent) -> SecurityEvent:
        """Append a security event (immutable)"""
        self.session.add(event)
        await self.session.flush()
        await self.session.refresh(event)
        return event

    async def get_recent_by_user(self, user_id: UUID, limit: int) -> List[SecurityEvent]:
        stmt = (
            select(SecurityEvent)
            .where(SecurityEvent.user_id == user_id)
            .order_by(col(SecurityEvent.created_at).desc())
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
