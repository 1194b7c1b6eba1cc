from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from account_security.domain.entities import SecurityEvent


class ISecurityEventRepository(ABC):
    """SecurityEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, event: SecurityEvent) -> SecurityEvent:
        """Append a security event (immutable)"""
        pass

    @abstractmethod
    async def get_recent_by_user(self, user_id: UUID, limit: int) -> List[SecurityEvent]:
        """Get the newest events of a user, newest first"""
        pass
