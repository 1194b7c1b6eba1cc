"""
Authentication Use Cases

Registration, login, second-factor login and password changes.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .complete_two_factor_login_use_case import CompleteTwoFactorLoginUseCase
from .change_password_use_case import ChangePasswordUseCase
from .get_security_events_use_case import GetSecurityEventsUseCase
from .dtos import (
    RegisterCommand,
    RegisterResponse,
    LoginResponse,
    ChangePasswordResponse,
    SecurityEventInfo,
    SecurityEventsResponse,
    UserInfo,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "CompleteTwoFactorLoginUseCase",
    "ChangePasswordUseCase",
    "GetSecurityEventsUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResponse",
    "ChangePasswordResponse",
    "SecurityEventsResponse",
    # DTOs - Nested Models
    "SecurityEventInfo",
    "UserInfo",
]
