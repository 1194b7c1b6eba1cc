"""
Authenticate Session Use Case

Resolves a bearer token to its active session and records activity.
"""

from typing import Optional

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.session_registry import SessionRegistry
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.libs.result import Error, Result, Return
from .dtos import Principal


class AuthenticateSessionUseCase:
    """
    Business Rules:
    - Only the SHA-256 digest of the token is looked up
    - Revoked or expired sessions are rejected
    - Activity is touched on every successful lookup (best effort)
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(self, token: str) -> Result[Principal]:
        async with self.uow:
            registry = SessionRegistry(self.uow, self.clock)
            session = await registry.resolve(token)
            if session is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid or expired token"))

            await registry.touch(session)
            await self.uow.commit()

            return Return.ok(
                Principal(
                    user_id=session.user_id,
                    tenant_id=session.tenant_id,
                    session_id=session.id,
                    token_hash=session.token_hash,
                )
            )
