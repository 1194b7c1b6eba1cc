from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from account_security.domain.entities import EphemeralToken, TokenPurpose


class IEphemeralTokenRepository(ABC):
    """EphemeralToken repository interface - application layer"""

    @abstractmethod
    async def get(self, subject_key: str, purpose: TokenPurpose) -> Optional[EphemeralToken]:
        """Get the live token of a subject for a purpose"""
        pass

    @abstractmethod
    async def create(self, token: EphemeralToken) -> EphemeralToken:
        """Create a new token"""
        pass

    @abstractmethod
    async def delete_for_subject(self, subject_key: str, purpose: TokenPurpose) -> int:
        """Delete any token of a subject for a purpose. Returns count deleted."""
        pass

    @abstractmethod
    async def delete_by_id(self, token_id: UUID) -> bool:
        """Delete one token. Returns True only for the caller that removed the row."""
        pass
