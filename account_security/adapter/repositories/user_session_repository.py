from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import col, or_, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from account_security.app.repositories.user_session_repository import (
    IUserSessionRepository,
)
from account_security.domain.entities import UserSession


def _active_at(now: datetime):
    return or_(
        col(UserSession.expires_at).is_(None),
        col(UserSession.expires_at) > now,
    )


class UserSessionRepository(IUserSessionRepository):
    """UserSession repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: UUID) -> Optional[UserSession]:
        """Get session by ID"""
        stmt = (
            select(UserSession)
            .where(UserSession.id == session_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_token_hash(self, token_hash: str) -> Optional[UserSession]:
        """Get session by token digest (O(1) through the unique index)"""
        stmt = (
            select(UserSession)
            .where(UserSession.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user_id(self, user_id: UUID) -> List[UserSession]:
        """Get all sessions for a user"""
        stmt = (
            select(UserSession)
            .where(UserSession.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_active_by_user_id(self, user_id: UUID, now: datetime) -> List[UserSession]:
        """Get active sessions, most recent activity first"""
        stmt = (
            select(UserSession)
            .where(UserSession.user_id == user_id, _active_at(now))
            .order_by(
                col(UserSession.last_activity_at).desc(),
                col(UserSession.created_at).desc(),
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, session_obj: UserSession) -> UserSession:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def touch(self, session_id: UUID, now: datetime) -> None:
        stmt = (
            update(UserSession)
            .where(UserSession.id == session_id)
            .values(last_activity_at=now)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def revoke_by_id(self, session_id: UUID, now: datetime) -> bool:
        """Revoke a specific session by ID"""
        stmt = (
            update(UserSession)
            .where(UserSession.id == session_id, _active_at(now))
            .values(expires_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def revoke_all_by_user_id(
        self, user_id: UUID, now: datetime, except_token_hash: Optional[str] = None
    ) -> int:
        """Revoke all active sessions for a user, optionally keeping one"""
        conditions = [UserSession.user_id == user_id, _active_at(now)]
        if except_token_hash is not None:
            conditions.append(UserSession.token_hash != except_token_hash)

        stmt = (
            update(UserSession)
            .where(*conditions)
            .values(expires_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
