"""
Email Verification Use Case DTOs
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SendVerificationResponse(BaseModel):
    status: str
    message: str


class VerifyEmailResponse(BaseModel):
    status: str
    message: str


class VerificationStatusResponse(BaseModel):
    verified: bool
    email: str
    verified_at: Optional[datetime] = None
