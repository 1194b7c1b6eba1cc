from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from account_security.domain.entities import AccountLockout


class IAccountLockoutRepository(ABC):
    """AccountLockout repository interface - application layer"""

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> Optional[AccountLockout]:
        """Get the lockout record of a user"""
        pass

    @abstractmethod
    async def ensure(self, user_id: UUID) -> AccountLockout:
        """Get the lockout record of a user, creating an empty one if missing"""
        pass

    @abstractmethod
    async def clear_expired_lock(self, user_id: UUID, now: datetime) -> bool:
        """Reset counter and lock if the lock has already elapsed. Returns True if reset."""
        pass

    @abstractmethod
    async def increment_failed_attempts(self, user_id: UUID, now: datetime) -> int:
        """Atomically add one failed attempt. Returns the new counter value."""
        pass

    @abstractmethod
    async def lock_until(self, user_id: UUID, until: datetime) -> bool:
        """Set locked_until if the account is not locked yet. Returns True if the lock was set."""
        pass

    @abstractmethod
    async def reset(self, user_id: UUID, now: datetime) -> None:
        """Reset counter to 0 and clear the lock"""
        pass
