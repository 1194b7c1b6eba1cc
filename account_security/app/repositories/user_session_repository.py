from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from account_security.domain.entities import UserSession


class IUserSessionRepository(ABC):
    """UserSession repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[UserSession]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[UserSession]:
        """Get session by the SHA-256 digest of its bearer token"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> List[UserSession]:
        """Get all sessions of a user, active or not"""
        pass

    @abstractmethod
    async def get_active_by_user_id(self, user_id: UUID, now: datetime) -> List[UserSession]:
        """Get active sessions of a user, most recent activity first"""
        pass

    @abstractmethod
    async def create(self, session: UserSession) -> UserSession:
        """Create a new session"""
        pass

    @abstractmethod
    async def touch(self, session_id: UUID, now: datetime) -> None:
        """Update last activity timestamp"""
        pass

    @abstractmethod
    async def revoke_by_id(self, session_id: UUID, now: datetime) -> bool:
        """Expire one active session. Returns True if it was active."""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(
        self, user_id: UUID, now: datetime, except_token_hash: Optional[str] = None
    ) -> int:
        """Expire every active session of a user, optionally keeping one. Returns count."""
        pass
