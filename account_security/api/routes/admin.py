"""
Admin API Routes - Support and Administration Endpoints

Authentication is via Admin API Key, not user bearer tokens.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from account_security.api.error import raise_for_error
from account_security.api.utils.admin_auth import verify_admin_api_key
from account_security.app.services.clock import Clock
from account_security.app.services.request_context import RequestContext
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.app.use_cases.admin import UnlockAccountResponse, UnlockAccountUseCase
from account_security.depends import get_clock, get_request_context, get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/users/{user_id}/unlock",
    status_code=status.HTTP_200_OK,
    response_model=UnlockAccountResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def unlock_account(
    user_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    Unlock Account

    Clears the failed-attempt counter and any active lock.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: USER_NOT_FOUND
    """
    result = await UnlockAccountUseCase(uow, clock).execute(user_id, context)

    if result.is_err():
        raise_for_error(result.error, {"USER_NOT_FOUND": status.HTTP_404_NOT_FOUND})

    return result.value
