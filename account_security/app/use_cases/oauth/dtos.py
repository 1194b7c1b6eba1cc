"""
OAuth Use Case DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from account_security.app.use_cases.auth.dtos import UserInfo
from account_security.domain.entities import OAuthConnection


class AuthorizationRedirectResponse(BaseModel):
    provider: str
    redirect_url: str
    state: str


class OAuthLoginResponse(BaseModel):
    status: str
    access_token: str
    token_type: str
    session_id: str
    user: UserInfo
    resolution: str  # existing_link, merged_by_email or created


class OAuthConnectionInfo(BaseModel):
    provider: str
    provider_email: Optional[str] = None
    name: Optional[str] = None
    avatar: Optional[str] = None
    connected_at: datetime

    @classmethod
    def from_connection(cls, connection: OAuthConnection) -> "OAuthConnectionInfo":
        data = connection.provider_data or {}
        return cls(
            provider=connection.provider,
            provider_email=connection.provider_email,
            name=data.get("name"),
            avatar=data.get("avatar"),
            connected_at=connection.connected_at,
        )


class OAuthConnectionsResponse(BaseModel):
    connections: List[OAuthConnectionInfo]
    has_password: bool


class OAuthDisconnectResponse(BaseModel):
    status: str
    provider: str
