"""
Email Verification Use Cases
"""

from .send_verification_use_case import SendVerificationUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .get_verification_status_use_case import GetVerificationStatusUseCase
from .dtos import SendVerificationResponse, VerifyEmailResponse, VerificationStatusResponse

__all__ = [
    "SendVerificationUseCase",
    "VerifyEmailUseCase",
    "GetVerificationStatusUseCase",
    "SendVerificationResponse",
    "VerifyEmailResponse",
    "VerificationStatusResponse",
]
