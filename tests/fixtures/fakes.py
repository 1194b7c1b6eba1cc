"""
In-memory stand-ins for the clock, the mailer and OAuth providers.
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from account_security.app.services.clock import Clock
from account_security.app.services.mailer import Mailer
from account_security.app.services.oauth_provider import (
    OAuthClaims,
    OAuthProvider,
    OAuthProviderError,
)

START = datetime(2026, 1, 15, 9, 0, 0)


class FakeClock(Clock):
    def __init__(self, start: Optional[datetime] = None):
        self.current = start or START

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


class RecordingMailer(Mailer):
    def __init__(self):
        self.resets: List[Tuple[str, str]] = []
        self.verifications: List[Tuple[str, UUID, str]] = []

    async def send_password_reset(self, email: str, token: str) -> None:
        self.resets.append((email, token))

    async def send_email_verification(self, email: str, user_id: UUID, token: str) -> None:
        self.verifications.append((email, user_id, token))

    def last_reset_token(self, email: str) -> str:
        return next(token for sent_to, token in reversed(self.resets) if sent_to == email)

    def last_verification_token(self, email: str) -> str:
        return next(
            token for sent_to, _, token in reversed(self.verifications) if sent_to == email
        )


class FakeOAuthProvider(OAuthProvider):
    """Provider whose authorization codes are registered up front by the test"""

    def __init__(self, name: str):
        self.name = name
        self.accounts: Dict[str, OAuthClaims] = {}
        self.exchanged: List[str] = []

    def register(
        self,
        code: str,
        provider_user_id: str,
        email: str,
        name: Optional[str] = None,
        avatar: Optional[str] = None,
        email_verified: bool = True,
    ) -> None:
        self.accounts[code] = OAuthClaims(
            provider_user_id=provider_user_id,
            email=email,
            email_verified=email_verified,
            name=name,
            avatar=avatar,
        )

    def authorization_url(self, state: str) -> str:
        return f"https://{self.name}.example.com/authorize?state={state}"

    async def exchange_code(self, code: str) -> OAuthClaims:
        self.exchanged.append(code)
        if code not in self.accounts:
            raise OAuthProviderError("invalid_grant")
        return self.accounts[code]
