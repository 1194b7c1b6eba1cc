from typing import Optional

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.session_registry import SessionRegistry
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import SecurityEventType
from account_security.libs.result import Error, Result, Return
from .dtos import Principal, RevokeSessionsResponse


class RevokeOtherSessionsUseCase:
    """Sign out every device except the one making the request"""

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self, principal: Principal, context: Optional[RequestContext] = None
    ) -> Result[RevokeSessionsResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(principal.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            count = await SessionRegistry(self.uow, self.clock).revoke_others(
                user, principal.token_hash
            )
            await SecurityAuditLog(self.uow, self.clock).record(
                SecurityEventType.sessions_revoked,
                user_id=user.id,
                tenant_id=user.tenant_id,
                context=context,
                metadata={"scope": "others", "revoked_count": count},
            )
            await self.uow.commit()

        return Return.ok(RevokeSessionsResponse(status="revoked", revoked_count=count))
