from typing import Optional
from uuid import UUID

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.two_factor_manager import TwoFactorManager
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.libs.result import Error, Result, Return
from .dtos import DisableTwoFactorResponse


class DisableTwoFactorUseCase:
    """Turns the second factor off (or cancels a pending setup) after a password check"""

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self, user_id: UUID, password: str, context: Optional[RequestContext] = None
    ) -> Result[DisableTwoFactorResponse]:
        async with self.uow:
            user = await self.uow.users.lock(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            manager = TwoFactorManager(
                self.uow, SecurityAuditLog(self.uow, self.clock), self.clock
            )
            result = await manager.disable(user, password, context)
            if result.is_err():
                return Return.err(result.error)

            await self.uow.commit()

        return Return.ok(
            DisableTwoFactorResponse(
                status="disabled", message="Two-factor authentication disabled"
            )
        )
