from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from account_security.api.error import raise_for_error
from account_security.app.services.clock import Clock
from account_security.app.services.request_context import RequestContext
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.app.use_cases.sessions import Principal
from account_security.app.use_cases.two_factor import (
    ConfirmTwoFactorUseCase,
    DisableTwoFactorResponse,
    DisableTwoFactorUseCase,
    EnableTwoFactorResponse,
    EnableTwoFactorUseCase,
    GetTwoFactorStatusUseCase,
    RecoveryCodesResponse,
    RegenerateRecoveryCodesUseCase,
    TwoFactorConfirmationResponse,
    TwoFactorStatusResponse,
)
from account_security.depends import (
    get_clock,
    get_current_principal,
    get_request_context,
    get_unit_of_work,
)

router = APIRouter(prefix="/two-factor", tags=["Two-Factor"])

TWO_FACTOR_ERRORS = {
    "TWO_FACTOR_ALREADY_ENABLED": status.HTTP_409_CONFLICT,
    "TWO_FACTOR_PENDING": status.HTTP_409_CONFLICT,
    "TWO_FACTOR_NOT_PENDING": status.HTTP_409_CONFLICT,
    "TWO_FACTOR_NOT_ENABLED": status.HTTP_409_CONFLICT,
    "INVALID_TWO_FACTOR_CODE": status.HTTP_401_UNAUTHORIZED,
    "RECOVERY_CODES_CHANGED": status.HTTP_409_CONFLICT,
    "INVALID_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


class CodeRequest(BaseModel):
    code: str = Field(..., min_length=6, max_length=6, description="6-digit TOTP code")


class PasswordRequest(BaseModel):
    password: str = Field(..., description="Current password")


@router.post("/enable", status_code=status.HTTP_200_OK, response_model=EnableTwoFactorResponse)
async def enable_two_factor(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Start Two-Factor Setup

    Returns the secret, provisioning URI and recovery codes exactly once.

    Raises:
        - 409 Conflict: TWO_FACTOR_ALREADY_ENABLED, TWO_FACTOR_PENDING
    """
    result = await EnableTwoFactorUseCase(uow, clock).execute(principal.user_id)

    if result.is_err():
        raise_for_error(result.error, TWO_FACTOR_ERRORS)

    return result.value


@router.post(
    "/confirm", status_code=status.HTTP_200_OK, response_model=TwoFactorConfirmationResponse
)
async def confirm_two_factor(
    request: CodeRequest,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    Confirm Two-Factor Setup

    Raises:
        - 401 Unauthorized: INVALID_TWO_FACTOR_CODE
        - 409 Conflict: TWO_FACTOR_NOT_PENDING
    """
    result = await ConfirmTwoFactorUseCase(uow, clock).execute(
        principal.user_id, request.code, context
    )

    if result.is_err():
        raise_for_error(result.error, TWO_FACTOR_ERRORS)

    return result.value


@router.post("/disable", status_code=status.HTTP_200_OK, response_model=DisableTwoFactorResponse)
async def disable_two_factor(
    request: PasswordRequest,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    Disable Two-Factor

    Raises:
        - 400 Bad Request: INVALID_PASSWORD
        - 409 Conflict: TWO_FACTOR_NOT_ENABLED
    """
    result = await DisableTwoFactorUseCase(uow, clock).execute(
        principal.user_id, request.password, context
    )

    if result.is_err():
        raise_for_error(result.error, TWO_FACTOR_ERRORS)

    return result.value


@router.post(
    "/recovery-codes", status_code=status.HTTP_200_OK, response_model=RecoveryCodesResponse
)
async def regenerate_recovery_codes(
    request: PasswordRequest,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    Regenerate Recovery Codes

    Raises:
        - 400 Bad Request: INVALID_PASSWORD
        - 409 Conflict: TWO_FACTOR_NOT_ENABLED, RECOVERY_CODES_CHANGED
    """
    result = await RegenerateRecoveryCodesUseCase(uow, clock).execute(
        principal.user_id, request.password, context
    )

    if result.is_err():
        raise_for_error(result.error, TWO_FACTOR_ERRORS)

    return result.value


@router.get("/status", status_code=status.HTTP_200_OK, response_model=TwoFactorStatusResponse)
async def two_factor_status(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    result = await GetTwoFactorStatusUseCase(uow, clock).execute(principal.user_id)

    if result.is_err():
        raise_for_error(result.error, TWO_FACTOR_ERRORS)

    return result.value
