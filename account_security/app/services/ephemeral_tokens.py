"""
Ephemeral Token Issuer

Single-use, time-bounded tokens for password reset and email verification.
"""

import hashlib
import hmac
import secrets
from datetime import timedelta
from enum import Enum
from typing import Dict, Optional

from account_security.app.services.clock import Clock
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import EphemeralToken, TokenPurpose
from config import ApplicationConfig


class TokenCheck(str, Enum):
    valid = "valid"
    missing = "missing"
    expired = "expired"
    mismatch = "mismatch"


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def default_ttls() -> Dict[TokenPurpose, timedelta]:
    return {
        TokenPurpose.reset: timedelta(minutes=ApplicationConfig.RESET_TOKEN_TTL_MINUTES),
        TokenPurpose.verify_email: timedelta(hours=ApplicationConfig.VERIFY_TOKEN_TTL_HOURS),
    }


class EphemeralTokenIssuer:
    """
    Issues and consumes single-use tokens keyed by (subject, purpose).

    Business Rules:
    - Only the SHA-256 hash of a token is stored
    - Issuing deletes any previous token for the pair, then inserts
    - Expired tokens are deleted when presented to consume
    - A mismatching token leaves the stored record intact
    - Consume succeeds for exactly one caller per token (atomic delete)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock,
        ttls: Optional[Dict[TokenPurpose, timedelta]] = None,
    ):
        self.uow = uow
        self.clock = clock
        self.ttls = ttls or default_ttls()

    async def issue(self, subject_key: str, purpose: TokenPurpose) -> str:
        token = secrets.token_urlsafe(48)
        now = self.clock.now()

        await self.uow.ephemeral_tokens.delete_for_subject(subject_key, purpose)
        await self.uow.ephemeral_tokens.create(
            EphemeralToken(
                subject_key=subject_key,
                purpose=purpose,
                token_hash=hash_token(token),
                expires_at=now + self.ttls[purpose],
                created_at=now,
            )
        )
        return token

    async def inspect(
        self, subject_key: str, purpose: TokenPurpose, supplied: str
    ) -> TokenCheck:
        """Read-only classification of a supplied token"""
        record = await self.uow.ephemeral_tokens.get(subject_key, purpose)
        return self._check(record, supplied)

    async def validate(self, subject_key: str, purpose: TokenPurpose, supplied: str) -> bool:
        return await self.inspect(subject_key, purpose, supplied) == TokenCheck.valid

    async def consume(self, subject_key: str, purpose: TokenPurpose, supplied: str) -> bool:
        record = await self.uow.ephemeral_tokens.get(subject_key, purpose)
        check = self._check(record, supplied)

        if check == TokenCheck.expired:
            await self.uow.ephemeral_tokens.delete_by_id(record.id)
            return False
        if check != TokenCheck.valid:
            return False

        return await self.uow.ephemeral_tokens.delete_by_id(record.id)

    def _check(self, record: Optional[EphemeralToken], supplied: str) -> TokenCheck:
        if record is None:
            return TokenCheck.missing
        if record.is_expired(self.clock.now()):
            return TokenCheck.expired
        if not hmac.compare_digest(record.token_hash, hash_token(supplied)):
            return TokenCheck.mismatch
        return TokenCheck.valid
