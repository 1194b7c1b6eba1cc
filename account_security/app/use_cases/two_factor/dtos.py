"""
Two-Factor Use Case DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class EnableTwoFactorResponse(BaseModel):
    """Secret, QR provisioning URI and recovery codes, shown exactly once"""

    secret: str
    provisioning_uri: str
    recovery_codes: List[str]
    message: str


class TwoFactorConfirmationResponse(BaseModel):
    confirmed: bool
    message: str


class DisableTwoFactorResponse(BaseModel):
    status: str
    message: str


class RecoveryCodesResponse(BaseModel):
    recovery_codes: List[str]
    message: str


class TwoFactorStatusResponse(BaseModel):
    state: str
    enabled: bool
    confirmed_at: Optional[datetime] = None
    recovery_codes_remaining: int
