import logging
from typing import Optional
from urllib.parse import urlencode
from uuid import UUID

from account_security.app.services.mailer import Mailer
from config import ApplicationConfig

logger = logging.getLogger(__name__)


class LoggingMailer(Mailer):
    """
    Mailer that writes outgoing links to the log.

    Links carry live tokens, so they are only emitted at DEBUG level.
    """

    def __init__(self, frontend_url: Optional[str] = None):
        self.frontend_url = (frontend_url or ApplicationConfig.FRONTEND_URL).rstrip("/")

    def link(self, path: str, **params) -> str:
        return f"{self.frontend_url}/{path}?{urlencode(params)}"

    async def send_password_reset(self, email: str, token: str) -> None:
        logger.info(f"Password reset email queued for {email}")
        logger.debug(f"Password reset link: {self.link('reset-password', email=email, token=token)}")

    async def send_email_verification(self, email: str, user_id: UUID, token: str) -> None:
        logger.info(f"Verification email queued for {email}")
        logger.debug(
            f"Verification link: {self.link('verify-email', user_id=str(user_id), token=token)}"
        )
