"""
Session Use Cases

Bearer-token authentication and device session management.
"""

from .authenticate_session_use_case import AuthenticateSessionUseCase
from .list_sessions_use_case import ListSessionsUseCase
from .revoke_session_use_case import RevokeSessionUseCase
from .revoke_other_sessions_use_case import RevokeOtherSessionsUseCase
from .revoke_all_sessions_use_case import RevokeAllSessionsUseCase
from .get_session_statistics_use_case import GetSessionStatisticsUseCase
from .dtos import (
    Principal,
    SessionInfo,
    SessionListResponse,
    RevokeSessionsResponse,
    SessionStatisticsResponse,
)

__all__ = [
    "AuthenticateSessionUseCase",
    "ListSessionsUseCase",
    "RevokeSessionUseCase",
    "RevokeOtherSessionsUseCase",
    "RevokeAllSessionsUseCase",
    "GetSessionStatisticsUseCase",
    "Principal",
    "SessionInfo",
    "SessionListResponse",
    "RevokeSessionsResponse",
    "SessionStatisticsResponse",
]
