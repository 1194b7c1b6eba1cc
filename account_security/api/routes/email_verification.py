from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from account_security.api.error import raise_for_error
from account_security.app.services.clock import Clock
from account_security.app.services.mailer import Mailer
from account_security.app.services.request_context import RequestContext
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.app.use_cases.email_verification import (
    GetVerificationStatusUseCase,
    SendVerificationResponse,
    SendVerificationUseCase,
    VerificationStatusResponse,
    VerifyEmailResponse,
    VerifyEmailUseCase,
)
from account_security.app.use_cases.sessions import Principal
from account_security.depends import (
    get_clock,
    get_current_principal,
    get_mailer,
    get_request_context,
    get_unit_of_work,
)

router = APIRouter(prefix="/email-verification", tags=["Email Verification"])


class SendVerificationRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


class VerifyEmailRequest(BaseModel):
    user_id: UUID = Field(..., description="User id from the verification link")
    token: str = Field(..., description="Email verification token")


@router.post("/send", status_code=status.HTTP_200_OK, response_model=SendVerificationResponse)
async def send_verification(
    request: SendVerificationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: Mailer = Depends(get_mailer),
    clock: Clock = Depends(get_clock),
):
    """
    Send Verification Email

    Replaces any outstanding verification token (valid 24 hours).

    Security:
        - Same response for unknown, verified and unverified emails
    """
    result = await SendVerificationUseCase(uow, mailer, clock).execute(request.email)

    if result.is_err():
        raise_for_error(result.error, {})

    return result.value


@router.post("/verify", status_code=status.HTTP_200_OK, response_model=VerifyEmailResponse)
async def verify_email(
    request: VerifyEmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    Verify Email

    Raises:
        - 400 Bad Request: TOKEN_INVALID
        - 409 Conflict: EMAIL_ALREADY_VERIFIED
        - 410 Gone: TOKEN_EXPIRED
    """
    result = await VerifyEmailUseCase(uow, clock).execute(
        request.user_id, request.token, context
    )

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "TOKEN_INVALID": status.HTTP_400_BAD_REQUEST,
                "TOKEN_EXPIRED": status.HTTP_410_GONE,
                "EMAIL_ALREADY_VERIFIED": status.HTTP_409_CONFLICT,
            },
        )

    return result.value


@router.get("/status", status_code=status.HTTP_200_OK, response_model=VerificationStatusResponse)
async def verification_status(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetVerificationStatusUseCase(uow).execute(principal.user_id)

    if result.is_err():
        raise_for_error(result.error, {"USER_NOT_FOUND": status.HTTP_404_NOT_FOUND})

    return result.value
