from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from account_security.domain.entities import PasswordHistory


class IPasswordHistoryRepository(ABC):
    """PasswordHistory repository interface - application layer"""

    @abstractmethod
    async def create(self, entry: PasswordHistory) -> PasswordHistory:
        """Append a history entry"""
        pass

    @abstractmethod
    async def get_recent(self, user_id: UUID, limit: int) -> List[PasswordHistory]:
        """Get the newest entries of a user, newest first"""
        pass

    @abstractmethod
    async def prune(self, user_id: UUID, keep: int) -> int:
        """Delete all but the newest `keep` entries. Returns count deleted."""
        pass
