"""
OAuth Identity Linker

Links a provider account to a local identity, merging by email or creating
a new identity when neither the link nor the email is known.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from account_security.app.services.clock import Clock
from account_security.app.services.oauth_provider import (
    OAuthClaims,
    OAuthProviderError,
    OAuthProviders,
    is_supported,
)
from account_security.app.services.password_hasher import unusable_password_hash
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.session_registry import IssuedSession, SessionRegistry
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import (
    OAuthConnection,
    SecurityEventType,
    Tenant,
    User,
)
from account_security.libs.result import Error, Result, Return
from config import ApplicationConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkedIdentity:
    user: User
    connection: OAuthConnection
    resolution: str  # "existing_link", "merged_by_email" or "created"
    issued: IssuedSession


def _profile_snapshot(claims: OAuthClaims) -> dict:
    return {"name": claims.name, "avatar": claims.avatar}


def unsupported(provider: str) -> Error:
    return Error("PROVIDER_UNSUPPORTED", f"OAuth provider '{provider}' is not supported")


class OAuthIdentityLinker:
    """
    Business Rules:
    - Only allow-listed providers are accepted
    - (provider, provider_user_id) maps to at most one identity
    - Unknown accounts are only accepted when the provider verified the
      email; they merge into an identity with the same email, otherwise a
      verified identity without a usable password is created in the
      default tenant
    - Every completed authorization issues a session
    - An identity always keeps one authentication method
    """

    def __init__(
        self,
        uow: UnitOfWork,
        providers: OAuthProviders,
        sessions: SessionRegistry,
        audit: SecurityAuditLog,
        clock: Clock,
    ):
        self.uow = uow
        self.providers = providers
        self.sessions = sessions
        self.audit = audit
        self.clock = clock

    def authorization_url(self, provider: str, state: str) -> Result[str]:
        if not is_supported(provider) or provider not in self.providers:
            return Return.err(unsupported(provider))
        return Return.ok(self.providers[provider].authorization_url(state))

    async def fetch_claims(self, provider: str, code: str) -> Result[OAuthClaims]:
        """One outbound call to the provider; network errors propagate"""
        if not is_supported(provider) or provider not in self.providers:
            return Return.err(unsupported(provider))
        try:
            claims = await self.providers[provider].exchange_code(code)
        except OAuthProviderError as e:
            logger.warning(f"OAuth authentication with {provider} failed: {e}")
            return Return.err(Error("PROVIDER_AUTH_FAILED", str(e)))
        return Return.ok(claims)

    async def complete_authorization(
        self,
        provider: str,
        claims: OAuthClaims,
        device_name: Optional[str] = None,
        context: Optional[RequestContext] = None,
    ) -> Result[LinkedIdentity]:
        if not is_supported(provider):
            return Return.err(unsupported(provider))

        now = self.clock.now()
        connection = await self.uow.oauth_connections.get_by_provider_user_id(
            provider, claims.provider_user_id
        )

        if connection is not None:
            user = await self.uow.users.get_by_id(connection.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "Linked user no longer exists"))
            connection.provider_email = claims.email
            connection.provider_data = _profile_snapshot(claims)
            connection = await self.uow.oauth_connections.update(connection)
            resolution = "existing_link"
        else:
            if not claims.email_verified:
                logger.warning(f"{provider} sign-in refused: email not verified by provider")
                return Return.err(
                    Error(
                        "PROVIDER_AUTH_FAILED",
                        f"{provider} has not verified the email address on this account",
                    )
                )

            user = await self.uow.users.get_by_email(claims.email)
            if user is not None:
                resolution = "merged_by_email"
            else:
                user = await self._create_user(claims, now)
                resolution = "created"

            connection = await self._link(user, provider, claims, now)
            await self.audit.record(
                SecurityEventType.oauth_connected,
                user_id=user.id,
                tenant_id=user.tenant_id,
                context=context,
                metadata={"provider": provider, "resolution": resolution},
            )

        issued = await self.sessions.issue(user, device_name=device_name, context=context)
        await self.audit.record(
            SecurityEventType.login_success,
            user_id=user.id,
            tenant_id=user.tenant_id,
            context=context,
            metadata={"method": "oauth", "provider": provider},
        )
        return Return.ok(
            LinkedIdentity(user=user, connection=connection, resolution=resolution, issued=issued)
        )

    async def connect(
        self,
        user: User,
        provider: str,
        claims: OAuthClaims,
        context: Optional[RequestContext] = None,
    ) -> Result[OAuthConnection]:
        if not is_supported(provider):
            return Return.err(unsupported(provider))

        if await self.uow.oauth_connections.get_by_user_and_provider(user.id, provider):
            return Return.err(
                Error("ALREADY_CONNECTED", f"A {provider} account is already connected")
            )
        existing = await self.uow.oauth_connections.get_by_provider_user_id(
            provider, claims.provider_user_id
        )
        if existing is not None:
            return Return.err(
                Error(
                    "ALREADY_CONNECTED",
                    f"This {provider} account is already connected to another user",
                )
            )

        connection = await self._link(user, provider, claims, self.clock.now())
        await self.audit.record(
            SecurityEventType.oauth_connected,
            user_id=user.id,
            tenant_id=user.tenant_id,
            context=context,
            metadata={"provider": provider},
        )
        return Return.ok(connection)

    async def disconnect(
        self, user: User, provider: str, context: Optional[RequestContext] = None
    ) -> Result[bool]:
        if not is_supported(provider):
            return Return.err(unsupported(provider))

        connection = await self.uow.oauth_connections.get_by_user_and_provider(user.id, provider)
        if connection is None:
            return Return.err(Error("NOT_CONNECTED", f"No {provider} account is connected"))

        links = await self.uow.oauth_connections.get_by_user_id(user.id)
        if not user.has_password and len(links) <= 1:
            return Return.err(
                Error(
                    "LAST_AUTH_METHOD",
                    "Cannot disconnect the only login method. Set a password first.",
                )
            )

        await self.uow.oauth_connections.delete(connection)
        await self.audit.record(
            SecurityEventType.oauth_disconnected,
            user_id=user.id,
            tenant_id=user.tenant_id,
            context=context,
            metadata={"provider": provider},
        )
        return Return.ok(True)

    async def list_connections(self, user: User) -> List[OAuthConnection]:
        return await self.uow.oauth_connections.get_by_user_id(user.id)

    async def _link(
        self, user: User, provider: str, claims: OAuthClaims, now
    ) -> OAuthConnection:
        return await self.uow.oauth_connections.create(
            OAuthConnection(
                user_id=user.id,
                tenant_id=user.tenant_id,
                provider=provider,
                provider_user_id=claims.provider_user_id,
                provider_email=claims.email,
                provider_data=_profile_snapshot(claims),
                connected_at=now,
            )
        )

    async def _create_user(self, claims: OAuthClaims, now) -> User:
        tenant = await self.uow.tenants.get_by_name(ApplicationConfig.DEFAULT_TENANT_NAME)
        if tenant is None:
            tenant = await self.uow.tenants.create(
                Tenant(name=ApplicationConfig.DEFAULT_TENANT_NAME, created_at=now)
            )

        user = await self.uow.users.create(
            User(
                tenant_id=tenant.id,
                name=claims.name or claims.email.split("@")[0],
                email=claims.email.strip().lower(),
                password_hash=unusable_password_hash(),
                has_password=False,
                email_verified_at=now,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(f"Created user {user.id} from OAuth sign-up")
        return user
