from typing import Optional
from uuid import UUID

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.two_factor_manager import TwoFactorManager
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.libs.result import Error, Result, Return
from .dtos import RecoveryCodesResponse


class RegenerateRecoveryCodesUseCase:
    """
    Business Rules:
    - Requires the current password and an enabled second factor
    - Every previously issued code stops working
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self, user_id: UUID, password: str, context: Optional[RequestContext] = None
    ) -> Result[RecoveryCodesResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            manager = TwoFactorManager(
                self.uow, SecurityAuditLog(self.uow, self.clock), self.clock
            )
            result = await manager.regenerate_recovery_codes(user, password, context)
            if result.is_err():
                return Return.err(result.error)

            await self.uow.commit()

        return Return.ok(
            RecoveryCodesResponse(
                recovery_codes=result.value,
                message="New recovery codes generated. Previous codes no longer work.",
            )
        )
