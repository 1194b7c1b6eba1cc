"""
Change Password Use Case
"""

import logging
from typing import Optional
from uuid import UUID

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.password_hasher import hash_password, verify_password
from account_security.app.services.password_policy import (
    PasswordPolicy,
    validate_strength,
    violations_details,
)
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.session_registry import SessionRegistry
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import SecurityEventType
from account_security.libs.result import Error, Result, Return
from .dtos import ChangePasswordResponse

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    """
    Use case for changing the password of the signed-in user.

    Business Rules:
    - Current password must be correct
    - New password must pass the strength rules and not be in the history
    - Every other session of the user is revoked; the caller's stays active
    """

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self,
        user_id: UUID,
        current_token_hash: Optional[str],
        current_password: str,
        new_password: str,
        context: Optional[RequestContext] = None,
    ) -> Result[ChangePasswordResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not verify_password(current_password, user.password_hash):
                return Return.err(Error("INVALID_PASSWORD", "Current password is incorrect"))

            violations = validate_strength(new_password)
            if violations:
                return Return.err(
                    Error(
                        "PASSWORD_POLICY_VIOLATION",
                        "Password does not meet the password policy",
                        violations_details(violations),
                    )
                )

            policy = PasswordPolicy(self.uow, self.clock)
            if await policy.is_reused(user, new_password):
                return Return.err(
                    Error(
                        "PASSWORD_REUSED",
                        "Password was used recently. Please choose a different password.",
                    )
                )

            password_hash = hash_password(new_password)
            user.password_hash = password_hash
            user.has_password = True
            user.updated_at = self.clock.now()
            await self.uow.users.update(user)
            await policy.record_history(user, password_hash)

            revoked = await SessionRegistry(self.uow, self.clock).revoke_others(
                user, current_token_hash
            )
            await SecurityAuditLog(self.uow, self.clock).record(
                SecurityEventType.password_changed,
                user_id=user.id,
                tenant_id=user.tenant_id,
                context=context,
                metadata={"sessions_revoked": revoked},
            )
            await self.uow.commit()

        logger.info(f"Password changed for user {user_id}")
        return Return.ok(
            ChangePasswordResponse(
                status="password_changed",
                message="Password changed successfully. Other sessions were signed out.",
                sessions_revoked=revoked,
            )
        )
