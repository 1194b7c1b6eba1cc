from typing import Dict, Type

from account_security.adapter.oauth.base import HttpOAuthProvider
from account_security.adapter.oauth.github import GitHubOAuthProvider
from account_security.adapter.oauth.google import GoogleOAuthProvider
from account_security.adapter.oauth.microsoft import MicrosoftOAuthProvider
from account_security.app.services.oauth_provider import OAuthProvider
from account_security.domain.entities import OAuthProviderName

PROVIDER_CLASSES: Dict[OAuthProviderName, Type[HttpOAuthProvider]] = {
    OAuthProviderName.google: GoogleOAuthProvider,
    OAuthProviderName.github: GitHubOAuthProvider,
    OAuthProviderName.microsoft: MicrosoftOAuthProvider,
}


def build_oauth_providers(ApplicationConfig) -> Dict[str, OAuthProvider]:
    """Instantiate every allow-listed provider from OAUTH_PROVIDERS settings"""
    settings = ApplicationConfig.OAUTH_PROVIDERS or {}
    providers = {}
    for name, provider_class in PROVIDER_CLASSES.items():
        options = settings.get(name.value) or {}
        providers[name.value] = provider_class(
            client_id=options.get("client_id", ""),
            client_secret=options.get("client_secret", ""),
            redirect_uri=options.get(
                "redirect_uri",
                f"{ApplicationConfig.FRONTEND_URL}/oauth/{name.value}/callback",
            ),
        )
    return providers
