"""
Begin OAuth Authorization Use Case

Builds the provider redirect URL with a signed, short-lived state.
"""

import secrets
from typing import Optional
from uuid import UUID

from account_security.api.utils.jwt import create_oauth_state
from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.oauth_provider import OAuthProviders, is_supported
from account_security.libs.result import Error, Result, Return
from .dtos import AuthorizationRedirectResponse

LOGIN = "login"
CONNECT = "connect"


class BeginAuthorizationUseCase:
    def __init__(self, providers: OAuthProviders, clock: Optional[Clock] = None):
        self.providers = providers
        self.clock = clock or SystemClock()

    async def execute(
        self, provider: str, action: str = LOGIN, user_id: Optional[UUID] = None
    ) -> Result[AuthorizationRedirectResponse]:
        if not is_supported(provider) or provider not in self.providers:
            return Return.err(
                Error("PROVIDER_UNSUPPORTED", f"OAuth provider '{provider}' is not supported")
            )

        state = create_oauth_state(
            provider, action, secrets.token_urlsafe(16), self.clock.now(), user_id
        )
        return Return.ok(
            AuthorizationRedirectResponse(
                provider=provider,
                redirect_url=self.providers[provider].authorization_url(state),
                state=state,
            )
        )
