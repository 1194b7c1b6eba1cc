from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from account_security.api.error import raise_for_error
from account_security.app.services.clock import Clock
from account_security.app.services.mailer import Mailer
from account_security.app.services.request_context import RequestContext
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.app.use_cases.password_reset import (
    ConfirmPasswordResetResponse,
    ConfirmPasswordResetUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    ValidateResetTokenResponse,
    ValidateResetTokenUseCase,
)
from account_security.depends import (
    get_clock,
    get_mailer,
    get_request_context,
    get_unit_of_work,
)

router = APIRouter(prefix="/password-reset", tags=["Password Reset"])


class RequestPasswordResetRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


class ValidateResetTokenRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    token: str = Field(..., description="Password reset token from email")


class ConfirmPasswordResetRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    token: str = Field(..., description="Password reset token from email")
    new_password: str = Field(..., description="New password")


@router.post(
    "/request", status_code=status.HTTP_200_OK, response_model=RequestPasswordResetResponse
)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: Mailer = Depends(get_mailer),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    Request Password Reset

    Security:
        - No email enumeration (same response for valid/invalid emails)
        - Token expires in 1 hour, stored as SHA-256 hash
    """
    result = await RequestPasswordResetUseCase(uow, mailer, clock).execute(
        request.email, context
    )

    if result.is_err():
        raise_for_error(result.error, {})

    return result.value


@router.post("/validate", status_code=status.HTTP_200_OK, response_model=ValidateResetTokenResponse)
async def validate_reset_token(
    request: ValidateResetTokenRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """Check a reset token without using it"""
    result = await ValidateResetTokenUseCase(uow, clock).execute(request.email, request.token)

    if result.is_err():
        raise_for_error(result.error, {})

    return result.value


@router.post(
    "/confirm", status_code=status.HTTP_200_OK, response_model=ConfirmPasswordResetResponse
)
async def confirm_password_reset(
    request: ConfirmPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    Confirm Password Reset

    Sets the new password and revokes every session.

    Raises:
        - 400 Bad Request: TOKEN_INVALID, PASSWORD_REUSED
        - 410 Gone: TOKEN_EXPIRED
        - 422 Unprocessable Entity: PASSWORD_POLICY_VIOLATION
    """
    result = await ConfirmPasswordResetUseCase(uow, clock).execute(
        request.email, request.token, request.new_password, context
    )

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "TOKEN_INVALID": status.HTTP_400_BAD_REQUEST,
                "TOKEN_EXPIRED": status.HTTP_410_GONE,
                "PASSWORD_REUSED": status.HTTP_400_BAD_REQUEST,
                "PASSWORD_POLICY_VIOLATION": status.HTTP_422_UNPROCESSABLE_ENTITY,
            },
        )

    return result.value
