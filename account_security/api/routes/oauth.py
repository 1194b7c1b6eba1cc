from typing import Dict, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from account_security.api.error import raise_for_error
from account_security.app.services.clock import Clock
from account_security.app.services.oauth_provider import OAuthProvider
from account_security.app.services.request_context import RequestContext
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.app.use_cases.oauth import (
    CONNECT,
    LOGIN,
    AuthorizationRedirectResponse,
    BeginAuthorizationUseCase,
    CompleteAuthorizationUseCase,
    ConnectProviderUseCase,
    DisconnectProviderUseCase,
    ListConnectionsUseCase,
    OAuthConnectionInfo,
    OAuthConnectionsResponse,
    OAuthDisconnectResponse,
    OAuthLoginResponse,
)
from account_security.app.use_cases.sessions import Principal
from account_security.depends import (
    get_clock,
    get_current_principal,
    get_oauth_providers,
    get_request_context,
    get_unit_of_work,
)

router = APIRouter(prefix="/oauth", tags=["OAuth"])

OAUTH_ERRORS = {
    "PROVIDER_UNSUPPORTED": status.HTTP_400_BAD_REQUEST,
    "OAUTH_STATE_INVALID": status.HTTP_400_BAD_REQUEST,
    "PROVIDER_AUTH_FAILED": status.HTTP_502_BAD_GATEWAY,
    "ALREADY_CONNECTED": status.HTTP_409_CONFLICT,
    "LAST_AUTH_METHOD": status.HTTP_409_CONFLICT,
    "NOT_CONNECTED": status.HTTP_404_NOT_FOUND,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


class OAuthCallbackRequest(BaseModel):
    code: str = Field(..., min_length=1, description="Authorization code from the provider")
    state: str = Field(..., min_length=1, description="State echoed back by the provider")
    device_name: Optional[str] = Field(None, max_length=255)


@router.get("/connections", status_code=status.HTTP_200_OK, response_model=OAuthConnectionsResponse)
async def list_connections(
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    result = await ListConnectionsUseCase(uow, clock).execute(principal.user_id)

    if result.is_err():
        raise_for_error(result.error, OAUTH_ERRORS)

    return result.value


@router.get(
    "/{provider}/redirect",
    status_code=status.HTTP_200_OK,
    response_model=AuthorizationRedirectResponse,
)
async def redirect(
    provider: str,
    providers: Dict[str, OAuthProvider] = Depends(get_oauth_providers),
    clock: Clock = Depends(get_clock),
):
    """
    OAuth Sign-In Redirect

    Returns the provider authorization URL carrying a signed state.

    Raises:
        - 400 Bad Request: PROVIDER_UNSUPPORTED
    """
    result = await BeginAuthorizationUseCase(providers, clock).execute(provider, LOGIN)

    if result.is_err():
        raise_for_error(result.error, OAUTH_ERRORS)

    return result.value


@router.post("/{provider}/callback", status_code=status.HTTP_200_OK, response_model=OAuthLoginResponse)
async def callback(
    provider: str,
    request: OAuthCallbackRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    providers: Dict[str, OAuthProvider] = Depends(get_oauth_providers),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    OAuth Sign-In Callback

    Links to an existing identity, merges by email, or creates a new
    identity, then issues a session.

    Raises:
        - 400 Bad Request: PROVIDER_UNSUPPORTED, OAUTH_STATE_INVALID
        - 502 Bad Gateway: PROVIDER_AUTH_FAILED
    """
    result = await CompleteAuthorizationUseCase(uow, providers, clock).execute(
        provider, request.code, request.state, request.device_name, context
    )

    if result.is_err():
        raise_for_error(result.error, OAUTH_ERRORS)

    return result.value


@router.get(
    "/{provider}/connect",
    status_code=status.HTTP_200_OK,
    response_model=AuthorizationRedirectResponse,
)
async def connect_redirect(
    provider: str,
    principal: Principal = Depends(get_current_principal),
    providers: Dict[str, OAuthProvider] = Depends(get_oauth_providers),
    clock: Clock = Depends(get_clock),
):
    """Authorization URL for linking a provider to the signed-in user"""
    result = await BeginAuthorizationUseCase(providers, clock).execute(
        provider, CONNECT, principal.user_id
    )

    if result.is_err():
        raise_for_error(result.error, OAUTH_ERRORS)

    return result.value


@router.post("/{provider}/connect", status_code=status.HTTP_200_OK, response_model=OAuthConnectionInfo)
async def connect(
    provider: str,
    request: OAuthCallbackRequest,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    providers: Dict[str, OAuthProvider] = Depends(get_oauth_providers),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    Connect Provider

    Raises:
        - 400 Bad Request: PROVIDER_UNSUPPORTED, OAUTH_STATE_INVALID
        - 409 Conflict: ALREADY_CONNECTED
        - 502 Bad Gateway: PROVIDER_AUTH_FAILED
    """
    result = await ConnectProviderUseCase(uow, providers, clock).execute(
        principal.user_id, provider, request.code, request.state, context
    )

    if result.is_err():
        raise_for_error(result.error, OAUTH_ERRORS)

    return result.value


@router.delete("/{provider}", status_code=status.HTTP_200_OK, response_model=OAuthDisconnectResponse)
async def disconnect(
    provider: str,
    principal: Principal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
    context: RequestContext = Depends(get_request_context),
):
    """
    Disconnect Provider

    Raises:
        - 400 Bad Request: PROVIDER_UNSUPPORTED
        - 404 Not Found: NOT_CONNECTED
        - 409 Conflict: LAST_AUTH_METHOD
    """
    result = await DisconnectProviderUseCase(uow, clock).execute(
        principal.user_id, provider, context
    )

    if result.is_err():
        raise_for_error(result.error, OAUTH_ERRORS)

    return result.value
