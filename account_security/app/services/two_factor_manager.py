"""
TOTP Second-Factor Manager

Lifecycle: Disabled -> PendingConfirmation -> Enabled -> Disabled.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from account_security.app.services import totp
from account_security.app.services.clock import Clock
from account_security.app.services.encryption import SecretCipher
from account_security.app.services.password_hasher import verify_password
from account_security.app.services.recovery_codes import RecoveryCodeVault
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import SecurityEventType, User
from account_security.domain.two_factor import (
    Disabled,
    Enabled,
    PendingConfirmation,
    TwoFactorState,
    read_state,
    write_state,
)
from account_security.libs.result import Error, Result, Return
from config import ApplicationConfig

logger = logging.getLogger(__name__)

CONFIRM_WINDOW = 0
VERIFY_WINDOW = 2


@dataclass(frozen=True)
class TwoFactorSetup:
    secret: str
    provisioning_uri: str
    recovery_codes: List[str]


@dataclass(frozen=True)
class TwoFactorVerification:
    verified: bool
    used_recovery_code: bool
    reprovision_recommended: bool
    recovery_codes_remaining: Optional[int] = None


@dataclass(frozen=True)
class TwoFactorStatus:
    state: str
    enabled: bool
    confirmed_at: Optional[datetime]
    recovery_codes_remaining: int


class TwoFactorManager:
    """
    Business Rules:
    - enable only from Disabled; codes and secret are returned exactly once
    - confirm only from PendingConfirmation, zero-step tolerance
    - verify only from Enabled; recovery codes first, then TOTP with +/-2 steps
    - a failed confirm or verify changes nothing and is not counted by lockout
    - disable needs the current password and wipes secret and codes
    """

    def __init__(
        self,
        uow: UnitOfWork,
        audit: SecurityAuditLog,
        clock: Clock,
        cipher: Optional[SecretCipher] = None,
        issuer: Optional[str] = None,
    ):
        self.uow = uow
        self.audit = audit
        self.clock = clock
        self.cipher = cipher or SecretCipher()
        self.vault = RecoveryCodeVault(uow, self.cipher)
        self.issuer = issuer or ApplicationConfig.TWO_FACTOR_ISSUER

    def state_of(self, user: User) -> TwoFactorState:
        return read_state(user, self.cipher)

    async def enable(self, user: User) -> Result[TwoFactorSetup]:
        state = self.state_of(user)
        if isinstance(state, Enabled):
            return Return.err(
                Error("TWO_FACTOR_ALREADY_ENABLED", "Two-factor authentication is already enabled")
            )
        if isinstance(state, PendingConfirmation):
            return Return.err(
                Error(
                    "TWO_FACTOR_PENDING",
                    "Two-factor setup is awaiting confirmation; disable it to start over",
                )
            )

        secret = totp.generate_secret()
        codes = self.vault.generate()
        write_state(
            user,
            PendingConfirmation(secret=secret, recovery_codes=self.vault.seal(codes)),
            self.cipher,
        )
        user.updated_at = self.clock.now()
        await self.uow.users.update(user)

        return Return.ok(
            TwoFactorSetup(
                secret=secret,
                provisioning_uri=totp.provisioning_uri(secret, user.email, self.issuer),
                recovery_codes=codes,
            )
        )

    async def confirm(
        self, user: User, code: str, context: Optional[RequestContext] = None
    ) -> Result[bool]:
        state = self.state_of(user)
        if not isinstance(state, PendingConfirmation):
            return Return.err(
                Error("TWO_FACTOR_NOT_PENDING", "No two-factor setup is awaiting confirmation")
            )

        now = self.clock.now()
        if not totp.verify_code(state.secret, code, now, window=CONFIRM_WINDOW):
            return Return.err(Error("INVALID_TWO_FACTOR_CODE", "Invalid verification code"))

        write_state(
            user,
            Enabled(secret=state.secret, recovery_codes=state.recovery_codes, confirmed_at=now),
            self.cipher,
        )
        user.updated_at = now
        await self.uow.users.update(user)
        await self.audit.record(
            SecurityEventType.two_factor_enabled,
            user_id=user.id,
            tenant_id=user.tenant_id,
            context=context,
        )
        return Return.ok(True)

    async def verify(
        self, user: User, code: str, context: Optional[RequestContext] = None
    ) -> Result[TwoFactorVerification]:
        state = self.state_of(user)
        if not isinstance(state, Enabled):
            return Return.err(
                Error("TWO_FACTOR_NOT_ENABLED", "Two-factor authentication is not enabled")
            )

        if await self.vault.consume(user, code):
            remaining = self.vault.remaining(user.two_factor_recovery_codes)
            await self.audit.record(
                SecurityEventType.two_factor_recovery_used,
                user_id=user.id,
                tenant_id=user.tenant_id,
                context=context,
                metadata={"recovery_codes_remaining": remaining},
            )
            return Return.ok(
                TwoFactorVerification(
                    verified=True,
                    used_recovery_code=True,
                    reprovision_recommended=True,
                    recovery_codes_remaining=remaining,
                )
            )

        if totp.verify_code(state.secret, code, self.clock.now(), window=VERIFY_WINDOW):
            return Return.ok(
                TwoFactorVerification(
                    verified=True, used_recovery_code=False, reprovision_recommended=False
                )
            )

        return Return.err(Error("INVALID_TWO_FACTOR_CODE", "Invalid verification code"))

    async def disable(
        self, user: User, password: str, context: Optional[RequestContext] = None
    ) -> Result[bool]:
        if not verify_password(password, user.password_hash):
            return Return.err(Error("INVALID_PASSWORD", "Password is incorrect"))

        if isinstance(self.state_of(user), Disabled):
            return Return.err(
                Error("TWO_FACTOR_NOT_ENABLED", "Two-factor authentication is not enabled")
            )

        write_state(user, Disabled(), self.cipher)
        user.updated_at = self.clock.now()
        await self.uow.users.update(user)
        await self.audit.record(
            SecurityEventType.two_factor_disabled,
            user_id=user.id,
            tenant_id=user.tenant_id,
            context=context,
        )
        return Return.ok(True)

    async def regenerate_recovery_codes(
        self, user: User, password: str, context: Optional[RequestContext] = None
    ) -> Result[List[str]]:
        if not verify_password(password, user.password_hash):
            return Return.err(Error("INVALID_PASSWORD", "Password is incorrect"))

        if not isinstance(self.state_of(user), Enabled):
            return Return.err(
                Error("TWO_FACTOR_NOT_ENABLED", "Two-factor authentication is not enabled")
            )

        codes = await self.vault.regenerate(user)
        if codes is None:
            return Return.err(
                Error(
                    "RECOVERY_CODES_CHANGED",
                    "Recovery codes changed while regenerating. Please try again.",
                )
            )

        await self.audit.record(
            SecurityEventType.recovery_codes_regenerated,
            user_id=user.id,
            tenant_id=user.tenant_id,
            context=context,
        )
        return Return.ok(codes)

    def status(self, user: User) -> TwoFactorStatus:
        state = self.state_of(user)
        return TwoFactorStatus(
            state=state.name,
            enabled=isinstance(state, Enabled),
            confirmed_at=state.confirmed_at if isinstance(state, Enabled) else None,
            recovery_codes_remaining=(
                0 if isinstance(state, Disabled) else self.vault.remaining(state.recovery_codes)
            ),
        )
