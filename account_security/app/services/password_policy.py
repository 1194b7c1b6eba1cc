"""
Password Policy Engine

Strength validation plus reuse detection against recent password hashes.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from account_security.app.services.clock import Clock
from account_security.app.services.password_hasher import verify_password
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import PasswordHistory, User
from config import ApplicationConfig

MIN_LENGTH = 8
SYMBOLS = '!@#$%^&*(),.?":{}|<>'

COMMON_PASSWORDS = frozenset(
    {
        "password",
        "12345678",
        "qwerty",
        "abc123",
        "password123",
        "admin",
        "letmein",
        "welcome",
        "monkey",
        "1234567890",
    }
)


@dataclass(frozen=True)
class PasswordViolation:
    code: str
    message: str


def validate_strength(password: str) -> List[PasswordViolation]:
    """
    Check a candidate password against every strength rule.

    All rules are evaluated; an empty list means the password is acceptable.
    """
    violations = []

    if len(password) < MIN_LENGTH:
        violations.append(
            PasswordViolation(
                "too_short", f"Password must be at least {MIN_LENGTH} characters long"
            )
        )
    if not re.search(r"[a-z]", password):
        violations.append(
            PasswordViolation(
                "missing_lowercase", "Password must contain at least one lowercase letter"
            )
        )
    if not re.search(r"[A-Z]", password):
        violations.append(
            PasswordViolation(
                "missing_uppercase", "Password must contain at least one uppercase letter"
            )
        )
    if not re.search(r"\d", password):
        violations.append(
            PasswordViolation("missing_digit", "Password must contain at least one number")
        )
    if not any(char in SYMBOLS for char in password):
        violations.append(
            PasswordViolation(
                "missing_symbol", "Password must contain at least one special character"
            )
        )
    if password.lower() in COMMON_PASSWORDS:
        violations.append(
            PasswordViolation(
                "common_password",
                "This password is too common. Please choose a stronger password",
            )
        )

    return violations


def violations_details(violations: List[PasswordViolation]) -> dict:
    return {"violations": [{"code": v.code, "message": v.message} for v in violations]}


class PasswordPolicy:
    """
    Reuse-history side of the policy.

    Business Rules:
    - Only the `depth` most recent hashes are kept per user
    - A candidate matching any kept hash counts as reused
    - History is never used to authenticate
    """

    def __init__(self, uow: UnitOfWork, clock: Clock, depth: Optional[int] = None):
        self.uow = uow
        self.clock = clock
        self.depth = depth or ApplicationConfig.PASSWORD_HISTORY_DEPTH

    async def is_reused(self, user: User, candidate: str) -> bool:
        history = await self.uow.password_history.get_recent(user.id, self.depth)
        return any(verify_password(candidate, entry.password_hash) for entry in history)

    async def record_history(self, user: User, password_hash: str) -> PasswordHistory:
        entry = await self.uow.password_history.create(
            PasswordHistory(
                user_id=user.id,
                password_hash=password_hash,
                created_at=self.clock.now(),
            )
        )
        await self.uow.password_history.prune(user.id, self.depth)
        return entry
