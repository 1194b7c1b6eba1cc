"""
Confirm Password Reset Use Case

Consumes a reset token and sets a new password.
"""

import logging
from typing import Optional

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.ephemeral_tokens import EphemeralTokenIssuer, TokenCheck
from account_security.app.services.password_hasher import hash_password
from account_security.app.services.password_policy import (
    PasswordPolicy,
    validate_strength,
    violations_details,
)
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.session_registry import SessionRegistry
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import SecurityEventType, TokenPurpose
from account_security.libs.result import Error, Result, Return
from .dtos import ConfirmPasswordResetResponse

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Business Rules:
    - New password must pass the strength rules and not be in the history
    - The token is consumed atomically; a concurrent second use fails
    - Expired tokens are deleted and reported as TOKEN_EXPIRED
    - Every session of the user is revoked
    - The identity has a usable password afterwards
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self,
        email: str,
        token: str,
        new_password: str,
        context: Optional[RequestContext] = None,
    ) -> Result[ConfirmPasswordResetResponse]:
        violations = validate_strength(new_password)
        if violations:
            return Return.err(
                Error(
                    "PASSWORD_POLICY_VIOLATION",
                    "Password does not meet the password policy",
                    violations_details(violations),
                )
            )

        email = email.strip().lower()
        invalid = Error("TOKEN_INVALID", "Invalid password reset token")

        async with self.uow:
            issuer = EphemeralTokenIssuer(self.uow, self.clock)

            check = await issuer.inspect(email, TokenPurpose.reset, token)
            if check == TokenCheck.expired:
                await issuer.consume(email, TokenPurpose.reset, token)
                await self.uow.commit()
                return Return.err(Error("TOKEN_EXPIRED", "Password reset token has expired"))
            if check != TokenCheck.valid:
                return Return.err(invalid)

            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(invalid)

            policy = PasswordPolicy(self.uow, self.clock)
            if await policy.is_reused(user, new_password):
                return Return.err(
                    Error(
                        "PASSWORD_REUSED",
                        "Password was used recently. Please choose a different password.",
                    )
                )

            if not await issuer.consume(email, TokenPurpose.reset, token):
                return Return.err(invalid)

            password_hash = hash_password(new_password)
            user.password_hash = password_hash
            user.has_password = True
            user.updated_at = self.clock.now()
            await self.uow.users.update(user)
            await policy.record_history(user, password_hash)

            revoked = await SessionRegistry(self.uow, self.clock).revoke_all(user)
            await SecurityAuditLog(self.uow, self.clock).record(
                SecurityEventType.password_reset_completed,
                user_id=user.id,
                tenant_id=user.tenant_id,
                context=context,
                metadata={"sessions_revoked": revoked},
            )
            await self.uow.commit()

        logger.info(f"Password reset completed for user {user.id}")
        return Return.ok(
            ConfirmPasswordResetResponse(
                status="password_reset",
                message="Password has been reset. Please sign in with your new password.",
            )
        )
