"""
Use Case: Unlock Account

Administrative endpoint to lift a brute-force lock before it expires.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.lockout_guard import LockoutGuard
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.libs.result import Error, Result, Return


class UnlockAccountResponse(BaseModel):
    """Response DTO for UnlockAccountUseCase"""

    status: str
    was_locked: bool


class UnlockAccountUseCase:
    """
    Unlock a user account (support / administration).

    Business Logic:
    1. Validate user exists
    2. Reset failed attempts and clear locked_until
    3. Record account_unlocked audit event

    Idempotent: unlocking an unlocked account succeeds with was_locked=False
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self, user_id: UUID, context: Optional[RequestContext] = None
    ) -> Result[UnlockAccountResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if not user:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            guard = LockoutGuard(self.uow, SecurityAuditLog(self.uow, self.clock), self.clock)
            was_locked = await guard.unlock(user, context)

            await self.uow.commit()

        return Return.ok(UnlockAccountResponse(status="unlocked", was_locked=was_locked))
