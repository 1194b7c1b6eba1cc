from typing import Any, Dict

from account_security.adapter.oauth.base import HttpOAuthProvider
from account_security.app.services.oauth_provider import OAuthClaims


class MicrosoftOAuthProvider(HttpOAuthProvider):
    name = "microsoft"
    authorize_url = "https://login.microsoftonline.com/common/oauth2/v2.0/authorize"
    token_url = "https://login.microsoftonline.com/common/oauth2/v2.0/token"
    userinfo_url = "https://graph.microsoft.com/v1.0/me"
    scope = "openid email profile User.Read"

    def to_claims(self, profile: Dict[str, Any]) -> OAuthClaims:
        mail = profile.get("mail")
        return OAuthClaims(
            provider_user_id=str(profile.get("id") or ""),
            # userPrincipalName is a sign-in name, not a mailbox
            email=mail or profile.get("userPrincipalName") or "",
            email_verified=bool(mail),
            name=profile.get("displayName"),
            avatar=None,
            raw=profile,
        )
