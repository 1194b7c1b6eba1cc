from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from account_security.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def lock(self, user_id: UUID) -> Optional[User]:
        """
        Load the user row with a row-level write lock.

        Serializes read-modify-write sequences (lockout counter, sessions,
        recovery codes) per user until the transaction ends.
        """
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def replace_recovery_codes(
        self, user_id: UUID, expected: Optional[str], replacement: Optional[str]
    ) -> bool:
        """
        Swap the encrypted recovery-code pool only if it still equals expected.

        Returns True when the row was updated.
        """
        pass
