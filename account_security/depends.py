from typing import Dict

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from account_security.adapter.oauth.registry import build_oauth_providers
from account_security.adapter.services.log_mailer import LoggingMailer
from account_security.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.mailer import Mailer
from account_security.app.services.oauth_provider import OAuthProvider
from account_security.app.services.request_context import RequestContext
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.app.use_cases.sessions import AuthenticateSessionUseCase, Principal

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()

_clock = SystemClock()
_mailer = LoggingMailer()
_oauth_providers = build_oauth_providers(ApplicationConfig)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_clock() -> Clock:
    return _clock


def get_mailer() -> Mailer:
    return _mailer


def get_oauth_providers() -> Dict[str, OAuthProvider]:
    return _oauth_providers


def get_request_context(request: Request) -> RequestContext:
    return RequestContext(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


async def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
) -> Principal:
    """
    Dependency to authenticate the opaque bearer token.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Principal with user, tenant, session and token digest

    Raises:
        HTTPException: 401 if the token has no active session
    """
    result = await AuthenticateSessionUseCase(uow, clock).execute(credentials.credentials)

    if result.is_err():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return result.value
