"""
Verify Email Use Case
"""

from typing import Optional
from uuid import UUID

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.ephemeral_tokens import EphemeralTokenIssuer, TokenCheck
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import SecurityEventType, TokenPurpose
from account_security.libs.result import Error, Result, Return
from .dtos import VerifyEmailResponse


class VerifyEmailUseCase:
    """
    Business Rules:
    - Token is consumed on success and cannot be used again
    - Expired tokens are deleted and reported as TOKEN_EXPIRED
    - email_verified_at is stamped once
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self, user_id: UUID, token: str, context: Optional[RequestContext] = None
    ) -> Result[VerifyEmailResponse]:
        invalid = Error("TOKEN_INVALID", "Invalid verification token")
        subject = str(user_id)

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(invalid)
            if user.email_verified:
                return Return.err(Error("EMAIL_ALREADY_VERIFIED", "Email is already verified"))

            issuer = EphemeralTokenIssuer(self.uow, self.clock)
            check = await issuer.inspect(subject, TokenPurpose.verify_email, token)
            if check == TokenCheck.expired:
                await issuer.consume(subject, TokenPurpose.verify_email, token)
                await self.uow.commit()
                return Return.err(Error("TOKEN_EXPIRED", "Verification token has expired"))

            if not await issuer.consume(subject, TokenPurpose.verify_email, token):
                return Return.err(invalid)

            now = self.clock.now()
            user.email_verified_at = now
            user.updated_at = now
            await self.uow.users.update(user)
            await SecurityAuditLog(self.uow, self.clock).record(
                SecurityEventType.email_verified,
                user_id=user.id,
                tenant_id=user.tenant_id,
                context=context,
            )
            await self.uow.commit()

        return Return.ok(
            VerifyEmailResponse(status="verified", message="Email verified successfully")
        )
