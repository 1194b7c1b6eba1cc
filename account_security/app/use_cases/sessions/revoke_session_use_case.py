from typing import Optional
from uuid import UUID

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.session_registry import SessionRegistry
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import SecurityEventType
from account_security.libs.result import Error, Result, Return
from .dtos import Principal, RevokeSessionsResponse


class RevokeSessionUseCase:
    """
    Revoke one session of the caller.

    Business Rules:
    - Sessions of other users are reported as not found
    - Revoking an already inactive session is also not found
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self,
        principal: Principal,
        session_id: UUID,
        context: Optional[RequestContext] = None,
    ) -> Result[RevokeSessionsResponse]:
        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None or session.user_id != principal.user_id:
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            if not await SessionRegistry(self.uow, self.clock).revoke(session):
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            await SecurityAuditLog(self.uow, self.clock).record(
                SecurityEventType.session_revoked,
                user_id=principal.user_id,
                tenant_id=principal.tenant_id,
                context=context,
                metadata={"session_id": str(session_id)},
            )
            await self.uow.commit()

        return Return.ok(RevokeSessionsResponse(status="revoked", revoked_count=1))
