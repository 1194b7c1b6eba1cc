import logging
from abc import abstractmethod
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from account_security.app.services.oauth_provider import (
    OAuthClaims,
    OAuthProvider,
    OAuthProviderError,
)

logger = logging.getLogger(__name__)


class HttpOAuthProvider(OAuthProvider):
    """
    Authorization-code flow over httpx.

    Subclasses set the endpoint URLs and map the profile payload to
    OAuthClaims. Requests are not retried; httpx.RequestError propagates.
    """

    authorize_url: str
    token_url: str
    userinfo_url: str
    scope: str

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self.transport = transport

    def authorization_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": self.scope,
            "state": state,
        }
        params.update(self.extra_authorize_params())
        return f"{self.authorize_url}?{urlencode(params)}"

    def extra_authorize_params(self) -> Dict[str, str]:
        return {}

    async def exchange_code(self, code: str) -> OAuthClaims:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            access_token = await self._fetch_access_token(client, code)
            profile = await self._fetch_profile(client, access_token)
            claims = self.to_claims(profile)

        if not claims.provider_user_id:
            raise OAuthProviderError(f"{self.name} did not return an account id")
        if not claims.email:
            raise OAuthProviderError(f"{self.name} did not return an email address")
        return claims

    async def _fetch_access_token(self, client: httpx.AsyncClient, code: str) -> str:
        response = await client.post(
            self.token_url,
            data={
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "code": code,
                "grant_type": "authorization_code",
                "redirect_uri": self.redirect_uri,
            },
            headers={"Accept": "application/json"},
        )
        if response.status_code != 200:
            logger.warning(f"{self.name} token exchange failed: {response.status_code}")
            raise OAuthProviderError(f"Failed to exchange authorization code with {self.name}")

        access_token = response.json().get("access_token")
        if not access_token:
            raise OAuthProviderError(f"{self.name} returned no access token")
        return access_token

    async def _fetch_profile(self, client: httpx.AsyncClient, access_token: str) -> Dict[str, Any]:
        response = await client.get(self.userinfo_url, headers=self._auth_headers(access_token))
        if response.status_code != 200:
            logger.warning(f"{self.name} profile fetch failed: {response.status_code}")
            raise OAuthProviderError(f"Failed to fetch user info from {self.name}")
        return response.json()

    def _auth_headers(self, access_token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {access_token}", "Accept": "application/json"}

    @abstractmethod
    def to_claims(self, profile: Dict[str, Any]) -> OAuthClaims:
        pass
