"""
Outbound mail interface.

Delivery itself lives outside this service; the adapters only hand the
link over to whatever transport is configured.
"""

from abc import ABC, abstractmethod
from uuid import UUID


class Mailer(ABC):
    @abstractmethod
    async def send_password_reset(self, email: str, token: str) -> None:
        pass

    @abstractmethod
    async def send_email_verification(self, email: str, user_id: UUID, token: str) -> None:
        pass
