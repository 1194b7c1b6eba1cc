from typing import Optional

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.ephemeral_tokens import EphemeralTokenIssuer
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import TokenPurpose
from account_security.libs.result import Result, Return
from .dtos import ValidateResetTokenResponse


class ValidateResetTokenUseCase:
    """Read-only pre-check of a reset token; never consumes it"""

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(self, email: str, token: str) -> Result[ValidateResetTokenResponse]:
        async with self.uow:
            valid = await EphemeralTokenIssuer(self.uow, self.clock).validate(
                email.strip().lower(), TokenPurpose.reset, token
            )
        return Return.ok(ValidateResetTokenResponse(valid=valid))
