from typing import Any, Dict

from account_security.adapter.oauth.base import HttpOAuthProvider
from account_security.app.services.oauth_provider import OAuthClaims


class GoogleOAuthProvider(HttpOAuthProvider):
    name = "google"
    authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url = "https://oauth2.googleapis.com/token"
    userinfo_url = "https://www.googleapis.com/oauth2/v3/userinfo"
    scope = "openid email profile"

    def extra_authorize_params(self) -> Dict[str, str]:
        return {"access_type": "online", "prompt": "select_account"}

    def to_claims(self, profile: Dict[str, Any]) -> OAuthClaims:
        return OAuthClaims(
            provider_user_id=str(profile.get("sub") or ""),
            email=profile.get("email") or "",
            # userinfo may send the flag as a string
            email_verified=profile.get("email_verified") in (True, "true"),
            name=profile.get("name"),
            avatar=profile.get("picture"),
            raw=profile,
        )
