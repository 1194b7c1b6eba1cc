from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import col, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from account_security.app.repositories.account_lockout_repository import (
    IAccountLockoutRepository,
)
from account_security.domain.entities import AccountLockout


class AccountLockoutRepository(IAccountLockoutRepository):
    """
    AccountLockout repository implementation using SQLModel.

    Counter changes are single UPDATE statements so concurrent failed
    attempts cannot under-count.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: UUID) -> Optional[AccountLockout]:
        """Get the lockout record of a user"""
        stmt = (
            select(AccountLockout)
            .where(AccountLockout.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def ensure(self, user_id: UUID) -> AccountLockout:
        """Get or lazily create the lockout record"""
        lockout = await self.get_by_user_id(user_id)
        if lockout is not None:
            return lockout

        lockout = AccountLockout(user_id=user_id)
        self.session.add(lockout)
        await self.session.flush()
        await self.session.refresh(lockout)
        return lockout

    async def clear_expired_lock(self, user_id: UUID, now: datetime) -> bool:
        stmt = (
            update(AccountLockout)
            .where(
                AccountLockout.user_id == user_id,
                col(AccountLockout.locked_until).is_not(None),
                col(AccountLockout.locked_until) <= now,
            )
            .values(failed_attempts=0, locked_until=None, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def increment_failed_attempts(self, user_id: UUID, now: datetime) -> int:
        stmt = (
            update(AccountLockout)
            .where(AccountLockout.user_id == user_id)
            .values(
                failed_attempts=AccountLockout.failed_attempts + 1,
                last_attempt_at=now,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.flush()

        lockout = await self.get_by_user_id(user_id)
        return lockout.failed_attempts if lockout else 0

    async def lock_until(self, user_id: UUID, until: datetime) -> bool:
        stmt = (
            update(AccountLockout)
            .where(
                AccountLockout.user_id == user_id,
                col(AccountLockout.locked_until).is_(None),
            )
            .values(locked_until=until)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def reset(self, user_id: UUID, now: datetime) -> None:
        stmt = (
            update(AccountLockout)
            .where(AccountLockout.user_id == user_id)
            .values(
                failed_attempts=0,
                locked_until=None,
                last_attempt_at=now,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.flush()
