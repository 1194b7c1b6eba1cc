"""
OAuth Use Cases

Provider sign-in plus connect/disconnect/list for signed-in users.
"""

from .begin_authorization_use_case import BeginAuthorizationUseCase, CONNECT, LOGIN
from .complete_authorization_use_case import CompleteAuthorizationUseCase
from .connect_provider_use_case import ConnectProviderUseCase
from .disconnect_provider_use_case import DisconnectProviderUseCase
from .list_connections_use_case import ListConnectionsUseCase
from .dtos import (
    AuthorizationRedirectResponse,
    OAuthLoginResponse,
    OAuthConnectionInfo,
    OAuthConnectionsResponse,
    OAuthDisconnectResponse,
)

__all__ = [
    "BeginAuthorizationUseCase",
    "CompleteAuthorizationUseCase",
    "ConnectProviderUseCase",
    "DisconnectProviderUseCase",
    "ListConnectionsUseCase",
    "CONNECT",
    "LOGIN",
    "AuthorizationRedirectResponse",
    "OAuthLoginResponse",
    "OAuthConnectionInfo",
    "OAuthConnectionsResponse",
    "OAuthDisconnectResponse",
]
