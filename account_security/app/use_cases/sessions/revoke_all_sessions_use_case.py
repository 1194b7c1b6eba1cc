from typing import Optional

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.password_hasher import verify_password
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.session_registry import SessionRegistry
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import SecurityEventType
from account_security.libs.result import Error, Result, Return
from .dtos import Principal, RevokeSessionsResponse


class RevokeAllSessionsUseCase:
    """
    Log out everywhere, including the current device.

    Business Rules:
    - Requires the current password
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self,
        principal: Principal,
        password: str,
        context: Optional[RequestContext] = None,
    ) -> Result[RevokeSessionsResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(principal.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not verify_password(password, user.password_hash):
                return Return.err(Error("INVALID_PASSWORD", "Password is incorrect"))

            count = await SessionRegistry(self.uow, self.clock).revoke_all(user)
            await SecurityAuditLog(self.uow, self.clock).record(
                SecurityEventType.sessions_revoked,
                user_id=user.id,
                tenant_id=user.tenant_id,
                context=context,
                metadata={"scope": "all", "revoked_count": count},
            )
            await self.uow.commit()

        return Return.ok(RevokeSessionsResponse(status="revoked", revoked_count=count))
