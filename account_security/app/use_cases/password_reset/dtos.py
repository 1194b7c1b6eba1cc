"""
Password Reset Use Case DTOs
"""

from pydantic import BaseModel


class RequestPasswordResetResponse(BaseModel):
    """Identical for known and unknown emails"""

    status: str
    message: str


class ValidateResetTokenResponse(BaseModel):
    valid: bool


class ConfirmPasswordResetResponse(BaseModel):
    status: str
    message: str
