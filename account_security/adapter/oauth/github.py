from typing import Any, Dict, Optional

import httpx

from account_security.adapter.oauth.base import HttpOAuthProvider
from account_security.app.services.oauth_provider import OAuthClaims

GITHUB_EMAILS_URL = "https://api.github.com/user/emails"


class GitHubOAuthProvider(HttpOAuthProvider):
    """
    The public profile email is not known to be verified; only the primary
    verified address from the emails endpoint is trusted.
    """

    name = "github"
    authorize_url = "https://github.com/login/oauth/authorize"
    token_url = "https://github.com/login/oauth/access_token"
    userinfo_url = "https://api.github.com/user"
    scope = "read:user user:email"

    async def _fetch_profile(self, client: httpx.AsyncClient, access_token: str) -> Dict[str, Any]:
        profile = await super()._fetch_profile(client, access_token)
        primary = await self._primary_email(client, access_token)
        if primary:
            profile["email"] = primary
        profile["email_verified"] = primary is not None
        return profile

    async def _primary_email(self, client: httpx.AsyncClient, access_token: str) -> Optional[str]:
        response = await client.get(GITHUB_EMAILS_URL, headers=self._auth_headers(access_token))
        if response.status_code != 200:
            return None
        for entry in response.json():
            if entry.get("primary") and entry.get("verified"):
                return entry.get("email")
        return None

    def to_claims(self, profile: Dict[str, Any]) -> OAuthClaims:
        return OAuthClaims(
            provider_user_id=str(profile.get("id") or ""),
            email=profile.get("email") or "",
            email_verified=bool(profile.get("email_verified")),
            name=profile.get("name") or profile.get("login"),
            avatar=profile.get("avatar_url"),
            raw=profile,
        )
