"""
Complete Two-Factor Login Use Case

Exchanges a login challenge plus a TOTP or recovery code for a session.
"""

from typing import Optional

from account_security.api.utils.jwt import verify_two_factor_challenge
from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.lockout_guard import LockoutGuard
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.session_registry import SessionRegistry
from account_security.app.services.two_factor_manager import TwoFactorManager
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import SecurityEventType
from account_security.libs.result import Error, Result, Return
from .dtos import LoginResponse, UserInfo


class CompleteTwoFactorLoginUseCase:
    """
    Business Rules:
    - Only a valid, unexpired two_factor challenge is accepted
    - A recovery code works in place of a TOTP code and is spent
    - Using a recovery code sets reprovision_recommended
    - A wrong code changes nothing (no lockout coupling)
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self,
        challenge_token: str,
        code: str,
        device_name: Optional[str] = None,
        context: Optional[RequestContext] = None,
    ) -> Result[LoginResponse]:
        user_id = verify_two_factor_challenge(challenge_token, self.clock.now())
        if user_id is None:
            return Return.err(
                Error("INVALID_CHALLENGE", "Two-factor challenge is invalid or expired")
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(
                    Error("INVALID_CHALLENGE", "Two-factor challenge is invalid or expired")
                )

            audit = SecurityAuditLog(self.uow, self.clock)
            lockout = LockoutGuard(self.uow, audit, self.clock)
            if await lockout.check_locked(user):
                minutes = await lockout.remaining_minutes(user)
                return Return.err(
                    Error(
                        "ACCOUNT_LOCKED",
                        f"Account is locked. Try again in {minutes} minutes.",
                        {"minutes_remaining": minutes},
                    )
                )

            verification = await TwoFactorManager(self.uow, audit, self.clock).verify(
                user, code, context
            )
            if verification.is_err():
                return Return.err(verification.error)

            await lockout.record_success(user, context)
            issued = await SessionRegistry(self.uow, self.clock).issue(
                user, device_name=device_name, context=context
            )
            result = verification.value
            await audit.record(
                SecurityEventType.login_success,
                user_id=user.id,
                tenant_id=user.tenant_id,
                context=context,
                metadata={
                    "method": "recovery_code" if result.used_recovery_code else "totp",
                    "session_id": str(issued.session.id),
                },
            )
            await self.uow.commit()

            return Return.ok(
                LoginResponse(
                    status="authenticated",
                    access_token=issued.token,
                    token_type="bearer",
                    session_id=str(issued.session.id),
                    user=UserInfo.from_user(user),
                    reprovision_recommended=result.reprovision_recommended,
                    recovery_codes_remaining=result.recovery_codes_remaining,
                )
            )
