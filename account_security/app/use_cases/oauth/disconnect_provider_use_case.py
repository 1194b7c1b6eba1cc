from typing import Optional
from uuid import UUID

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.oauth_linker import OAuthIdentityLinker
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.session_registry import SessionRegistry
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.libs.result import Error, Result, Return
from .dtos import OAuthDisconnectResponse


class DisconnectProviderUseCase:
    """
    Business Rules:
    - Blocked when the link is the user's only way to sign in
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self, user_id: UUID, provider: str, context: Optional[RequestContext] = None
    ) -> Result[OAuthDisconnectResponse]:
        async with self.uow:
            user = await self.uow.users.lock(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            linker = OAuthIdentityLinker(
                self.uow,
                {},
                SessionRegistry(self.uow, self.clock),
                SecurityAuditLog(self.uow, self.clock),
                self.clock,
            )
            result = await linker.disconnect(user, provider, context)
            if result.is_err():
                return Return.err(result.error)

            await self.uow.commit()

        return Return.ok(OAuthDisconnectResponse(status="disconnected", provider=provider))
