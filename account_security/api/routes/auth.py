from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from account_security.api.error import raise_for_error
from account_security.app.services.clock import Clock
from account_security.app.services.mailer import Mailer
from account_security.app.services.request_context import RequestContext
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.app.use_cases.auth import (
    ChangePasswordResponse,
    ChangePasswordUseCase,
    CompleteTwoFactorLoginUseCase,
    GetSecurityEventsUseCase,
    LoginResponse,
    LoginUseCase,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    SecurityEventsResponse,
)
from account_security.app.use_cases.sessions import Principal
from account_security.depends import (
    get_clock,
    get_current_principal,
    get_mailer,
    get_request_context,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

LOGIN_ERRORS = {
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "ACCOUNT_LOCKED": status.HTTP_423_LOCKED,
    "EMAIL_UNVERIFIED": status.HTTP_403_FORBIDDEN,
}


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Password rules are enforced by the use case so every violation is
    reported at once.
    """

    tenant_id: UUID = Field(..., description="Tenant the identity joins")
    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: Mailer = Depends(get_mailer),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    User Registration

    Creates an identity with an unverified email and mails a verification link.

    Raises:
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: EMAIL_ALREADY_EXISTS
        - 422 Unprocessable Entity: PASSWORD_POLICY_VIOLATION (details.violations)
    """
    command = RegisterCommand(
        tenant_id=request.tenant_id,
        name=request.name,
        email=request.email,
        password=request.password,
    )
    result = await RegisterUseCase(uow, mailer, clock).execute(command, context)

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "PASSWORD_POLICY_VIOLATION": status.HTTP_422_UNPROCESSABLE_ENTITY,
                "TENANT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
                "EMAIL_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
            },
        )

    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    device_name: Optional[str] = Field(None, max_length=255, description="Device label")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    User Login

    Returns a bearer token, or a two-factor challenge when the second
    factor is enabled.

    Raises:
        - 401 Unauthorized: INVALID_CREDENTIALS
        - 403 Forbidden: EMAIL_UNVERIFIED
        - 423 Locked: ACCOUNT_LOCKED (details.minutes_remaining)
    """
    result = await LoginUseCase(uow, clock).execute(
        request.email, request.password, request.device_name, context
    )

    if result.is_err():
        raise_for_error(result.error, LOGIN_ERRORS)

    return result.value


class TwoFactorLoginRequest(BaseModel):
    challenge_token: str = Field(..., description="Challenge returned by /auth/login")
    code: str = Field(..., min_length=1, max_length=32, description="TOTP or recovery code")
    device_name: Optional[str] = Field(None, max_length=255)


@router.post("/two-factor/verify", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def verify_two_factor_login(
    request: TwoFactorLoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    Complete Two-Factor Login

    reprovision_recommended is true when a recovery code was used.

    Raises:
        - 401 Unauthorized: INVALID_CHALLENGE, INVALID_TWO_FACTOR_CODE
        - 409 Conflict: TWO_FACTOR_NOT_ENABLED
        - 423 Locked: ACCOUNT_LOCKED
    """
    result = await CompleteTwoFactorLoginUseCase(uow, clock).execute(
        request.challenge_token, request.code, request.device_name, context
    )

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_CHALLENGE": status.HTTP_401_UNAUTHORIZED,
                "INVALID_TWO_FACTOR_CODE": status.HTTP_401_UNAUTHORIZED,
                "TWO_FACTOR_NOT_ENABLED": status.HTTP_409_CONFLICT,
                "ACCOUNT_LOCKED": status.HTTP_423_LOCKED,
            },
        )

    return result.value


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., description="Current password")
    new_password: str = Field(..., description="New password")


@router.post(
    "/change-password", status_code=status.HTTP_200_OK, response_model=ChangePasswordResponse
)
async def change_password(
    request: ChangePasswordRequest,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    Change Password

    Signs out every other session; the calling session stays active.

    Raises:
        - 400 Bad Request: INVALID_PASSWORD, PASSWORD_REUSED
        - 422 Unprocessable Entity: PASSWORD_POLICY_VIOLATION
    """
    result = await ChangePasswordUseCase(uow, clock).execute(
        principal.user_id,
        principal.token_hash,
        request.current_password,
        request.new_password,
        context,
    )

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_PASSWORD": status.HTTP_400_BAD_REQUEST,
                "PASSWORD_REUSED": status.HTTP_400_BAD_REQUEST,
                "PASSWORD_POLICY_VIOLATION": status.HTTP_422_UNPROCESSABLE_ENTITY,
                "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
            },
        )

    return result.value


@router.get(
    "/security-events", status_code=status.HTTP_200_OK, response_model=SecurityEventsResponse
)
async def security_events(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """The caller's 20 most recent security events"""
    result = await GetSecurityEventsUseCase(uow, clock).execute(principal.user_id)

    if result.is_err():
        raise_for_error(result.error, {})

    return result.value
