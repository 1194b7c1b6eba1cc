from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from account_security.api.error import raise_for_error
from account_security.app.services.clock import Clock
from account_security.app.services.request_context import RequestContext
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.app.use_cases.sessions import (
    GetSessionStatisticsUseCase,
    ListSessionsUseCase,
    Principal,
    RevokeAllSessionsUseCase,
    RevokeOtherSessionsUseCase,
    RevokeSessionUseCase,
    RevokeSessionsResponse,
    SessionListResponse,
    SessionStatisticsResponse,
)
from account_security.depends import (
    get_clock,
    get_current_principal,
    get_request_context,
    get_unit_of_work,
)

router = APIRouter(prefix="/sessions", tags=["Sessions"])

SESSION_ERRORS = {
    "SESSION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_PASSWORD": status.HTTP_400_BAD_REQUEST,
}


class RevokeAllSessionsRequest(BaseModel):
    """Log out everywhere requires the current password"""

    password: str = Field(..., description="Current password")


@router.get("", status_code=status.HTTP_200_OK, response_model=SessionListResponse)
async def list_sessions(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    List Active Sessions

    Newest activity first; the calling session has is_current=true.
    """
    result = await ListSessionsUseCase(uow, clock).execute(principal)

    if result.is_err():
        raise_for_error(result.error, SESSION_ERRORS)

    return result.value


@router.get("/statistics", status_code=status.HTTP_200_OK, response_model=SessionStatisticsResponse)
async def session_statistics(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    result = await GetSessionStatisticsUseCase(uow, clock).execute(principal)

    if result.is_err():
        raise_for_error(result.error, SESSION_ERRORS)

    return result.value


@router.post("/revoke-others", status_code=status.HTTP_200_OK, response_model=RevokeSessionsResponse)
async def revoke_other_sessions(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """Sign out every device except this one"""
    result = await RevokeOtherSessionsUseCase(uow, clock).execute(principal, context)

    if result.is_err():
        raise_for_error(result.error, SESSION_ERRORS)

    return result.value


@router.post("/revoke-all", status_code=status.HTTP_200_OK, response_model=RevokeSessionsResponse)
async def revoke_all_sessions(
    request: RevokeAllSessionsRequest,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    Log Out Everywhere

    Revokes every session including the caller's.

    Raises:
        - 400 Bad Request: INVALID_PASSWORD
    """
    result = await RevokeAllSessionsUseCase(uow, clock).execute(
        principal, request.password, context
    )

    if result.is_err():
        raise_for_error(result.error, SESSION_ERRORS)

    return result.value


@router.delete("/{session_id}", status_code=status.HTTP_200_OK, response_model=RevokeSessionsResponse)
async def revoke_session(
    session_id: UUID,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    Revoke One Session

    Raises:
        - 404 Not Found: SESSION_NOT_FOUND (unknown, inactive or not yours)
    """
    result = await RevokeSessionUseCase(uow, clock).execute(principal, session_id, context)

    if result.is_err():
        raise_for_error(result.error, SESSION_ERRORS)

    return result.value
