"""
Complete OAuth Authorization Use Case

Handles the provider callback: exchange the code, resolve or create the
identity, issue a session.
"""

from typing import Optional

from account_security.api.utils.jwt import verify_oauth_state
from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.oauth_linker import OAuthIdentityLinker, unsupported
from account_security.app.services.oauth_provider import OAuthProviders, is_supported
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.session_registry import SessionRegistry
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.app.use_cases.auth.dtos import UserInfo
from account_security.libs.result import Error, Result, Return
from .begin_authorization_use_case import LOGIN
from .dtos import OAuthLoginResponse


class CompleteAuthorizationUseCase:
    """
    Business Rules:
    - state must be a valid login state issued for this provider
    - Provider rejection -> PROVIDER_AUTH_FAILED; network errors propagate
    - Resolution: existing link, then same email, then new identity
    """

    def __init__(
        self, uow: UnitOfWork, providers: OAuthProviders, clock: Optional[Clock] = None
    ):
        self.uow = uow
        self.providers = providers
        self.clock = clock or SystemClock()

    async def execute(
        self,
        provider: str,
        code: str,
        state: str,
        device_name: Optional[str] = None,
        context: Optional[RequestContext] = None,
    ) -> Result[OAuthLoginResponse]:
        if not is_supported(provider):
            return Return.err(unsupported(provider))

        if verify_oauth_state(state, provider, LOGIN, self.clock.now()) is None:
            return Return.err(Error("OAUTH_STATE_INVALID", "OAuth state is invalid or expired"))

        async with self.uow:
            audit = SecurityAuditLog(self.uow, self.clock)
            linker = OAuthIdentityLinker(
                self.uow,
                self.providers,
                SessionRegistry(self.uow, self.clock),
                audit,
                self.clock,
            )

            claims = await linker.fetch_claims(provider, code)
            if claims.is_err():
                return Return.err(claims.error)

            result = await linker.complete_authorization(
                provider, claims.value, device_name=device_name, context=context
            )
            if result.is_err():
                return Return.err(result.error)

            await self.uow.commit()

        linked = result.value
        return Return.ok(
            OAuthLoginResponse(
                status="authenticated",
                access_token=linked.issued.token,
                token_type="bearer",
                session_id=str(linked.issued.session.id),
                user=UserInfo.from_user(linked.user),
                resolution=linked.resolution,
            )
        )
