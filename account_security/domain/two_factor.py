"""
Second-factor state of a user.

The users table keeps the second factor as nullable columns; code that
manipulates it works with one of three explicit states instead, so a
confirmed factor without a secret cannot be expressed.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, Union

from .entities import User


class Cipher(Protocol):
    def encrypt(self, plaintext: str) -> str: ...

    def decrypt(self, ciphertext: str) -> str: ...


@dataclass(frozen=True)
class Disabled:
    name = "disabled"


@dataclass(frozen=True)
class PendingConfirmation:
    """Secret provisioned, waiting for the first valid code"""

    secret: str
    recovery_codes: str  # sealed pool, see RecoveryCodeVault

    name = "pending_confirmation"


@dataclass(frozen=True)
class Enabled:
    secret: str
    recovery_codes: str
    confirmed_at: datetime

    name = "enabled"


TwoFactorState = Union[Disabled, PendingConfirmation, Enabled]


def read_state(user: User, cipher: Cipher) -> TwoFactorState:
    if not user.two_factor_secret or not user.two_factor_recovery_codes:
        return Disabled()

    secret = cipher.decrypt(user.two_factor_secret)
    if user.two_factor_enabled and user.two_factor_confirmed_at is not None:
        return Enabled(
            secret=secret,
            recovery_codes=user.two_factor_recovery_codes,
            confirmed_at=user.two_factor_confirmed_at,
        )
    return PendingConfirmation(secret=secret, recovery_codes=user.two_factor_recovery_codes)


def write_state(user: User, state: TwoFactorState, cipher: Cipher) -> None:
    if isinstance(state, Disabled):
        user.two_factor_enabled = False
        user.two_factor_secret = None
        user.two_factor_recovery_codes = None
        user.two_factor_confirmed_at = None
    elif isinstance(state, PendingConfirmation):
        user.two_factor_enabled = False
        user.two_factor_secret = cipher.encrypt(state.secret)
        user.two_factor_recovery_codes = state.recovery_codes
        user.two_factor_confirmed_at = None
    elif isinstance(state, Enabled):
        user.two_factor_enabled = True
        user.two_factor_secret = cipher.encrypt(state.secret)
        user.two_factor_recovery_codes = state.recovery_codes
        user.two_factor_confirmed_at = state.confirmed_at
    else:
        raise TypeError(f"Unknown second-factor state: {state!r}")
