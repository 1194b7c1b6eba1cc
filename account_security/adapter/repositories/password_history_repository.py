from typing import List
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from account_security.app.repositories.password_history_repository import (
    IPasswordHistoryRepository,
)
from account_security.domain.entities import PasswordHistory


class PasswordHistoryRepository(IPasswordHistoryRepository):
    """PasswordHistory repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: PasswordHistory) -> PasswordHistory:
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def get_recent(self, user_id: UUID, limit: int) -> List[PasswordHistory]:
        # Insertion order (sequence) breaks created_at ties
        stmt = (
            select(PasswordHistory)
            .where(PasswordHistory.user_id == user_id)
            .order_by(
                col(PasswordHistory.created_at).desc(),
                col(PasswordHistory.sequence).desc(),
            )
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def prune(self, user_id: UUID, keep: int) -> int:
        keep_sequences = [entry.sequence for entry in await self.get_recent(user_id, keep)]
        stmt = delete(PasswordHistory).where(
            PasswordHistory.user_id == user_id,
            col(PasswordHistory.sequence).not_in(keep_sequences),
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
