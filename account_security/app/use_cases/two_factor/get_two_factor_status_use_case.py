from typing import Optional
from uuid import UUID

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.two_factor_manager import TwoFactorManager
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.libs.result import Error, Result, Return
from .dtos import TwoFactorStatusResponse


class GetTwoFactorStatusUseCase:
    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(self, user_id: UUID) -> Result[TwoFactorStatusResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            status = TwoFactorManager(
                self.uow, SecurityAuditLog(self.uow, self.clock), self.clock
            ).status(user)

            return Return.ok(
                TwoFactorStatusResponse(
                    state=status.state,
                    enabled=status.enabled,
                    confirmed_at=status.confirmed_at,
                    recovery_codes_remaining=status.recovery_codes_remaining,
                )
            )
