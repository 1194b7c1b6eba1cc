"""
Request Password Reset Use Case

Issues a reset token and mails it, without revealing whether the email is
registered.
"""

import logging
from typing import Optional

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.ephemeral_tokens import EphemeralTokenIssuer
from account_security.app.services.mailer import Mailer
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import SecurityEventType, TokenPurpose
from account_security.libs.result import Result, Return
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "If that email is registered, a password reset link has been sent."


class RequestPasswordResetUseCase:
    """
    Business Rules:
    - Same response whether or not the email exists
    - Token keyed by the normalised email, valid for 1 hour
    - A new request replaces any outstanding reset token
    """

    def __init__(self, uow: UnitOfWork, mailer: Mailer, clock: Optional[Clock] = None):
        self.uow = uow
        self.mailer = mailer
        self.clock = clock or SystemClock()

    async def execute(
        self, email: str, context: Optional[RequestContext] = None
    ) -> Result[RequestPasswordResetResponse]:
        email = email.strip().lower()
        token = None

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is not None:
                token = await EphemeralTokenIssuer(self.uow, self.clock).issue(
                    email, TokenPurpose.reset
                )
                await SecurityAuditLog(self.uow, self.clock).record(
                    SecurityEventType.password_reset_requested,
                    user_id=user.id,
                    tenant_id=user.tenant_id,
                    context=context,
                )
                await self.uow.commit()

        if token is not None:
            await self.mailer.send_password_reset(email, token)
        else:
            logger.info("Password reset requested for unknown email")

        return Return.ok(RequestPasswordResetResponse(status="sent", message=GENERIC_MESSAGE))
