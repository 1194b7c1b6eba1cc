"""
Login Use Case

Password login with lockout, email-verification gate and second-factor
challenge.
"""

from typing import Optional

from account_security.api.utils.jwt import create_two_factor_challenge
from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.lockout_guard import LockoutGuard
from account_security.app.services.password_hasher import (
    burn_password_check,
    verify_password,
)
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.session_registry import SessionRegistry
from account_security.app.services.two_factor_manager import TwoFactorManager
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import SecurityEventType
from account_security.domain.two_factor import Enabled
from account_security.libs.result import Error, Result, Return
from .dtos import LoginResponse, UserInfo


class LoginUseCase:
    """
    Use case for password login.

    Sequence (each step may end the login):
    1. Unknown email -> INVALID_CREDENTIALS (a bcrypt check still runs)
    2. Locked account -> ACCOUNT_LOCKED with minutes remaining
    3. Wrong password -> failure recorded, INVALID_CREDENTIALS
    4. Unverified email -> EMAIL_UNVERIFIED (not counted as a failure)
    5. Second factor enabled -> short-lived challenge token
    6. Otherwise -> counter reset, session issued
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self,
        email: str,
        password: str,
        device_name: Optional[str] = None,
        context: Optional[RequestContext] = None,
    ) -> Result[LoginResponse]:
        async with self.uow:
            audit = SecurityAuditLog(self.uow, self.clock)
            lockout = LockoutGuard(self.uow, audit, self.clock)

            user = await self.uow.users.get_by_email(email)
            if user is None:
                burn_password_check()
                await audit.record(
                    SecurityEventType.login_failed,
                    context=context,
                    metadata={"email": email.strip().lower(), "reason": "unknown_email"},
                )
                await self.uow.commit()
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if await lockout.check_locked(user):
                minutes = await lockout.remaining_minutes(user)
                return Return.err(
                    Error(
                        "ACCOUNT_LOCKED",
                        f"Account is locked. Try again in {minutes} minutes.",
                        {"minutes_remaining": minutes},
                    )
                )

            if not verify_password(password, user.password_hash):
                await lockout.record_failure(user, context)
                await self.uow.commit()
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not user.email_verified:
                return Return.err(
                    Error("EMAIL_UNVERIFIED", "Please verify your email address first")
                )

            manager = TwoFactorManager(self.uow, audit, self.clock)
            if isinstance(manager.state_of(user), Enabled):
                return Return.ok(
                    LoginResponse(
                        status="two_factor_required",
                        challenge_token=create_two_factor_challenge(
                            user.id, self.clock.now()
                        ),
                    )
                )

            await lockout.record_success(user, context)
            issued = await SessionRegistry(self.uow, self.clock).issue(
                user, device_name=device_name, context=context
            )
            await audit.record(
                SecurityEventType.login_success,
                user_id=user.id,
                tenant_id=user.tenant_id,
                context=context,
                metadata={"method": "password", "session_id": str(issued.session.id)},
            )
            await self.uow.commit()

            return Return.ok(
                LoginResponse(
                    status="authenticated",
                    access_token=issued.token,
                    token_type="bearer",
                    session_id=str(issued.session.id),
                    user=UserInfo.from_user(user),
                )
            )
