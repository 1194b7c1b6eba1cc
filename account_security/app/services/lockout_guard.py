"""
Lockout Guard

Per-account failed-attempt counter and lock state machine.
"""

import logging
import math
from datetime import timedelta
from typing import Optional

from account_security.app.services.clock import Clock
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import AccountLockout, SecurityEventType, User
from config import ApplicationConfig

logger = logging.getLogger(__name__)


class LockoutGuard:
    """
    Brute-force protection for password logins.

    States:
        Unlocked(count) -> failure -> Unlocked(count + 1) while count + 1 < max
        Unlocked(max - 1) -> failure -> Locked(until = now + lock window)
        Locked -> any call after `until` behaves as Unlocked(0)
        any state -> success -> Unlocked(0)

    Business Rules:
    - Expiry is evaluated lazily; there is no background sweep
    - Counter changes run under the user row lock and as atomic UPDATEs
    - account_locked is emitted once per lock, in addition to login_failed
    """

    def __init__(
        self,
        uow: UnitOfWork,
        audit: SecurityAuditLog,
        clock: Clock,
        max_attempts: Optional[int] = None,
        lock_minutes: Optional[int] = None,
    ):
        self.uow = uow
        self.audit = audit
        self.clock = clock
        self.max_attempts = max_attempts or ApplicationConfig.LOCKOUT_MAX_ATTEMPTS
        self.lock_minutes = lock_minutes or ApplicationConfig.LOCKOUT_MINUTES

    async def check_locked(self, user: User) -> bool:
        lockout = await self.uow.lockouts.get_by_user_id(user.id)
        return lockout is not None and lockout.is_locked(self.clock.now())

    async def remaining_minutes(self, user: User) -> Optional[int]:
        """Whole minutes (rounded up) until the lock lifts, or None if unlocked"""
        lockout = await self.uow.lockouts.get_by_user_id(user.id)
        now = self.clock.now()
        if lockout is None or not lockout.is_locked(now):
            return None
        return math.ceil((lockout.locked_until - now).total_seconds() / 60)

    async def record_failure(
        self, user: User, context: Optional[RequestContext] = None
    ) -> AccountLockout:
        now = self.clock.now()

        await self.uow.users.lock(user.id)
        await self.uow.lockouts.ensure(user.id)
        await self.uow.lockouts.clear_expired_lock(user.id, now)
        attempts = await self.uow.lockouts.increment_failed_attempts(user.id, now)

        await self.audit.record(
            SecurityEventType.login_failed,
            user_id=user.id,
            tenant_id=user.tenant_id,
            context=context,
            metadata={"email": user.email, "failed_attempts": attempts},
        )

        if attempts >= self.max_attempts:
            until = now + timedelta(minutes=self.lock_minutes)
            if await self.uow.lockouts.lock_until(user.id, until):
                logger.warning(
                    f"Account {user.id} locked after {attempts} failed attempts"
                )
                await self.audit.record(
                    SecurityEventType.account_locked,
                    user_id=user.id,
                    tenant_id=user.tenant_id,
                    context=context,
                    metadata={
                        "failed_attempts": attempts,
                        "locked_until": until.isoformat(),
                    },
                )

        return await self.uow.lockouts.get_by_user_id(user.id)

    async def record_success(
        self, user: User, context: Optional[RequestContext] = None
    ) -> None:
        await self.uow.users.lock(user.id)
        await self.uow.lockouts.ensure(user.id)
        await self.uow.lockouts.reset(user.id, self.clock.now())

    async def unlock(self, user: User, context: Optional[RequestContext] = None) -> bool:
        """Explicit administrative unlock. Returns True if a lock was lifted."""
        now = self.clock.now()
        await self.uow.users.lock(user.id)
        lockout = await self.uow.lockouts.ensure(user.id)
        was_locked = lockout.is_locked(now)

        await self.uow.lockouts.reset(user.id, now)
        await self.audit.record(
            SecurityEventType.account_unlocked,
            user_id=user.id,
            tenant_id=user.tenant_id,
            context=context,
            metadata={"was_locked": was_locked},
        )
        logger.info(f"Account {user.id} unlocked by administrator")
        return was_locked
