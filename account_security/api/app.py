from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
from .middleware import RequestLoggingMiddleware
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    if exc.base_error.details:
        error_dict["details"] = exc.base_error.details
    logger.warning(f"Client error: {exc.base_error.code} on {request.url.path}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code} on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def init_sentry(ApplicationConfig) -> None:
    if not ApplicationConfig.ENABLE_SENTRY or not ApplicationConfig.DSN_SENTRY:
        return

    import sentry_sdk

    sentry_sdk.init(
        dsn=ApplicationConfig.DSN_SENTRY,
        environment=ApplicationConfig.SENTRY_ENVIRONMENT,
        send_default_pii=False,
    )
    logger.info(f"Sentry enabled for environment {ApplicationConfig.SENTRY_ENVIRONMENT}")


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_sentry(ApplicationConfig)

    app = FastAPI(title="Account Security API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.add_middleware(RequestLoggingMiddleware)

    from account_security.api.routes import (
        admin,
        auth,
        email_verification,
        health_check,
        oauth,
        password_reset,
        sessions,
        two_factor,
    )

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router)
    app.include_router(two_factor.router)
    app.include_router(sessions.router)
    app.include_router(oauth.router)
    app.include_router(password_reset.router)
    app.include_router(email_verification.router)
    app.include_router(admin.router)

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
