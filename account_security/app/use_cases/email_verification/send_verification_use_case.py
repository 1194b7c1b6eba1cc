"""
Send Verification Use Case

(Re)sends the email verification link. Unknown and already verified
emails get the same response as unverified ones, without a mail.
"""

import logging
from typing import Optional

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.ephemeral_tokens import EphemeralTokenIssuer
from account_security.app.services.mailer import Mailer
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import TokenPurpose
from account_security.libs.result import Result, Return
from .dtos import SendVerificationResponse

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "If that email is registered, a verification link has been sent."


class SendVerificationUseCase:
    """
    Business Rules:
    - Token keyed by user id, valid for 24 hours
    - Resending replaces the previous token
    - Same response for unknown, verified and unverified emails
    - Already verified identities get no mail
    """

    def __init__(self, uow: UnitOfWork, mailer: Mailer, clock: Optional[Clock] = None):
        self.uow = uow
        self.mailer = mailer
        self.clock = clock or SystemClock()

    async def execute(self, email: str) -> Result[SendVerificationResponse]:
        token = None

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is not None and user.email_verified:
                logger.info(f"Verification requested for already verified user {user.id}")
            elif user is not None:
                token = await EphemeralTokenIssuer(self.uow, self.clock).issue(
                    str(user.id), TokenPurpose.verify_email
                )
                await self.uow.commit()

        if token is not None:
            await self.mailer.send_email_verification(user.email, user.id, token)
        elif user is None:
            logger.info("Verification requested for unknown email")

        return Return.ok(SendVerificationResponse(status="sent", message=GENERIC_MESSAGE))
