"""
OAuth provider interface.

One implementation per allow-listed provider, selected from a mapping keyed
by provider name.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from account_security.domain.entities import OAuthProviderName


@dataclass(frozen=True)
class OAuthClaims:
    """
    Identity asserted by a provider after a successful code exchange.

    email_verified is true only when the provider vouches for the mailbox.
    """

    provider_user_id: str
    email: str
    email_verified: bool = False
    name: Optional[str] = None
    avatar: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)


class OAuthProviderError(Exception):
    """The provider rejected the exchange or returned an unusable profile"""


class OAuthProvider(ABC):
    name: str

    @abstractmethod
    def authorization_url(self, state: str) -> str:
        pass

    @abstractmethod
    async def exchange_code(self, code: str) -> OAuthClaims:
        """
        Trade an authorization code for the user's claims.

        Raises:
            OAuthProviderError: non-2xx answer or no email on the profile
            httpx.RequestError: network failure (not retried)
        """
        pass


OAuthProviders = Mapping[str, OAuthProvider]


def is_supported(provider: str) -> bool:
    return provider in {p.value for p in OAuthProviderName}
