"""
Session Use Case DTOs
"""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from account_security.domain.entities import UserSession


class Principal(BaseModel):
    """Authenticated caller resolved from a bearer token"""

    user_id: UUID
    tenant_id: UUID
    session_id: UUID
    token_hash: str


class SessionInfo(BaseModel):
    id: str
    device_name: Optional[str] = None
    device_type: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    last_activity_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: datetime
    is_current: bool

    @classmethod
    def from_session(cls, session: UserSession, current_session_id: Optional[UUID]) -> "SessionInfo":
        return cls(
            id=str(session.id),
            device_name=session.device_name,
            device_type=session.device_type,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            last_activity_at=session.last_activity_at,
            expires_at=session.expires_at,
            created_at=session.created_at,
            is_current=session.id == current_session_id,
        )


class SessionListResponse(BaseModel):
    sessions: List[SessionInfo]


class RevokeSessionsResponse(BaseModel):
    status: str
    revoked_count: int


class SessionStatisticsResponse(BaseModel):
    total_sessions: int
    active_sessions: int
    by_device_type: Dict[str, int]
