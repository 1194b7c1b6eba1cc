from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from account_security.domain.entities import OAuthConnection


class IOAuthConnectionRepository(ABC):
    """OAuthConnection repository interface - application layer"""

    @abstractmethod
    async def get_by_provider_user_id(
        self, provider: str, provider_user_id: str
    ) -> Optional[OAuthConnection]:
        """Get the link of an external account"""
        pass

    @abstractmethod
    async def get_by_user_and_provider(
        self, user_id: UUID, provider: str
    ) -> Optional[OAuthConnection]:
        """Get the link of a user to one provider"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> List[OAuthConnection]:
        """Get all links of a user"""
        pass

    @abstractmethod
    async def create(self, connection: OAuthConnection) -> OAuthConnection:
        """Create a new link"""
        pass

    @abstractmethod
    async def update(self, connection: OAuthConnection) -> OAuthConnection:
        """Update existing link"""
        pass

    @abstractmethod
    async def delete(self, connection: OAuthConnection) -> None:
        """Remove a link"""
        pass
