"""
Password Reset Use Cases
"""

from .request_password_reset_use_case import RequestPasswordResetUseCase
from .validate_reset_token_use_case import ValidateResetTokenUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import (
    RequestPasswordResetResponse,
    ValidateResetTokenResponse,
    ConfirmPasswordResetResponse,
)

__all__ = [
    "RequestPasswordResetUseCase",
    "ValidateResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    "RequestPasswordResetResponse",
    "ValidateResetTokenResponse",
    "ConfirmPasswordResetResponse",
]
