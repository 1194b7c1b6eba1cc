"""
Enable Two-Factor Use Case

Starts TOTP setup: Disabled -> PendingConfirmation.
"""

from typing import Optional
from uuid import UUID

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.two_factor_manager import TwoFactorManager
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.libs.result import Error, Result, Return
from .dtos import EnableTwoFactorResponse


class EnableTwoFactorUseCase:
    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(self, user_id: UUID) -> Result[EnableTwoFactorResponse]:
        async with self.uow:
            user = await self.uow.users.lock(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            manager = TwoFactorManager(
                self.uow, SecurityAuditLog(self.uow, self.clock), self.clock
            )
            result = await manager.enable(user)
            if result.is_err():
                return Return.err(result.error)

            await self.uow.commit()

        setup = result.value
        return Return.ok(
            EnableTwoFactorResponse(
                secret=setup.secret,
                provisioning_uri=setup.provisioning_uri,
                recovery_codes=setup.recovery_codes,
                message=(
                    "Scan the QR code with your authenticator app, then confirm with a code. "
                    "Store the recovery codes safely; they will not be shown again."
                ),
            )
        )
