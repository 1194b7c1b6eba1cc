from typing import Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from account_security.app.repositories.user_repository import IUserRepository
from account_security.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (case-insensitive)"""
        stmt = (
            select(User)
            .where(User.email == email.strip().lower())
            .order_by(User.created_at)
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def lock(self, user_id: UUID) -> Optional[User]:
        """Load the user row FOR UPDATE (no-op lock on SQLite)"""
        stmt = (
            select(User)
            .where(User.id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def replace_recovery_codes(
        self, user_id: UUID, expected: Optional[str], replacement: Optional[str]
    ) -> bool:
        """Compare-and-swap the encrypted recovery-code pool"""
        stmt = (
            update(User)
            .where(User.id == user_id, User.two_factor_recovery_codes == expected)
            .values(two_factor_recovery_codes=replacement)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
