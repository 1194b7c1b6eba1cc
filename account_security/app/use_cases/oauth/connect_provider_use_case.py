from typing import Optional
from uuid import UUID

from account_security.api.utils.jwt import verify_oauth_state
from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.oauth_linker import OAuthIdentityLinker, unsupported
from account_security.app.services.oauth_provider import OAuthProviders, is_supported
from account_security.app.services.request_context import RequestContext
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.session_registry import SessionRegistry
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.libs.result import Error, Result, Return
from .begin_authorization_use_case import CONNECT
from .dtos import OAuthConnectionInfo


class ConnectProviderUseCase:
    """
    Link a provider account to the signed-in user.

    Business Rules:
    - state must be a connect state issued to this same user
    - One link per provider per user
    - A provider account linked to someone else cannot be taken over
    """

    def __init__(
        self, uow: UnitOfWork, providers: OAuthProviders, clock: Optional[Clock] = None
    ):
        self.uow = uow
        self.providers = providers
        self.clock = clock or SystemClock()

    async def execute(
        self,
        user_id: UUID,
        provider: str,
        code: str,
        state: str,
        context: Optional[RequestContext] = None,
    ) -> Result[OAuthConnectionInfo]:
        if not is_supported(provider):
            return Return.err(unsupported(provider))

        payload = verify_oauth_state(state, provider, CONNECT, self.clock.now())
        if payload is None or payload.get("user_id") != str(user_id):
            return Return.err(Error("OAUTH_STATE_INVALID", "OAuth state is invalid or expired"))

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            linker = OAuthIdentityLinker(
                self.uow,
                self.providers,
                SessionRegistry(self.uow, self.clock),
                SecurityAuditLog(self.uow, self.clock),
                self.clock,
            )
            claims = await linker.fetch_claims(provider, code)
            if claims.is_err():
                return Return.err(claims.error)

            result = await linker.connect(user, provider, claims.value, context)
            if result.is_err():
                return Return.err(result.error)

            await self.uow.commit()

        return Return.ok(OAuthConnectionInfo.from_connection(result.value))
