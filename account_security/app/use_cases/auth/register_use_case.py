"""
Register Use Case

Creates an identity with an unverified email inside an existing tenant.
"""

import logging
from typing import Optional

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.ephemeral_tokens import EphemeralTokenIssuer
from account_security.app.services.mailer import Mailer
from account_security.app.services.password_hasher import hash_password
from account_security.app.services.password_policy import (
    PasswordPolicy,
    validate_strength,
    violations_details,
)
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import SecurityEventType, TokenPurpose, User
from account_security.libs.result import Error, Result, Return
from .dtos import RegisterCommand, RegisterResponse, UserInfo

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Use case for registering a new identity.

    Business Rules:
    - Password strength is checked before anything is written
    - Tenant must exist
    - Email must not be registered yet
    - Identity starts unverified; a verification token is issued and mailed
    - Initial password hash is recorded in the password history
    - user_registered audit event
    """

    def __init__(self, uow: UnitOfWork, mailer: Mailer, clock: Optional[Clock] = None):
        self.uow = uow
        self.mailer = mailer
        self.clock = clock or SystemClock()

    async def execute(
        self, command: RegisterCommand, context: Optional[RequestContext] = None
    ) -> Result[RegisterResponse]:
        violations = validate_strength(command.password)
        if violations:
            return Return.err(
                Error(
                    "PASSWORD_POLICY_VIOLATION",
                    "Password does not meet the password policy",
                    violations_details(violations),
                )
            )

        email = command.email.strip().lower()

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(command.tenant_id)
            if tenant is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            if await self.uow.users.get_by_email(email) is not None:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email is already registered")
                )

            now = self.clock.now()
            password_hash = hash_password(command.password)
            user = await self.uow.users.create(
                User(
                    tenant_id=tenant.id,
                    name=command.name,
                    email=email,
                    password_hash=password_hash,
                    created_at=now,
                    updated_at=now,
                )
            )

            await PasswordPolicy(self.uow, self.clock).record_history(user, password_hash)
            await SecurityAuditLog(self.uow, self.clock).record(
                SecurityEventType.user_registered,
                user_id=user.id,
                tenant_id=tenant.id,
                context=context,
                metadata={"email": email},
            )
            token = await EphemeralTokenIssuer(self.uow, self.clock).issue(
                str(user.id), TokenPurpose.verify_email
            )

            await self.uow.commit()

        await self.mailer.send_email_verification(user.email, user.id, token)
        logger.info(f"Registered user {user.id} in tenant {tenant.id}")

        return Return.ok(
            RegisterResponse(
                user=UserInfo.from_user(user),
                message="Registration successful. Please verify your email address.",
            )
        )
