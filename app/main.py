"""FastAPI application factory."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.auth.identity_client import IdentityClient
from app.config import Settings, get_settings
from app.core.errors import CredentialServiceError
from app.core.key_manager import KeyManager
from app.infra.logging_config import get_logger, setup_logging
from app.routers import decrypt_credentials_router, system

logger = get_logger("main")

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]
CORS_ALLOW_METHODS = ["GET", "POST", "OPTIONS"]


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CredentialServiceError)
    async def credential_error_handler(
        request: Request, exc: CredentialServiceError
    ) -> JSONResponse:
        logger.info(
            "%s %s failed: %s (%s)",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc.detail,
        )
        return _error_response(exc.status_code, exc.public_message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(422, "Invalid request")


def register_error_middleware(app: FastAPI) -> None:
    """Turn unexpected faults into a generic 500.

    Registered before CORSMiddleware so CORS wraps it and the error body stays
    readable from the browser. No exception text reaches the response.
    """

    @app.middleware("http")
    async def unhandled_error_middleware(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "Unhandled error on %s %s: %s",
                request.method,
                request.url.path,
                type(exc).__name__,
            )
            return _error_response(500, "Internal server error")


def create_app(
    *,
    settings: Optional[Settings] = None,
    key_manager: Optional[KeyManager] = None,
    identity_client: Optional[IdentityClient] = None,
) -> FastAPI:
    """
    Build the API. The master key is loaded once here and shared read-only.

    Tests pass their own key_manager / identity_client instead of reading
    them from the environment.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, debug=False)
    app.state.key_manager = key_manager or KeyManager.from_settings(settings)
    app.state.identity_client = identity_client or IdentityClient.from_settings(
        settings
    )
    register_error_middleware(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )
    register_exception_handlers(app)

    app.include_router(decrypt_credentials_router.router)
    app.include_router(system.router)

    logger.info(
        "Started %s (env=%s, decryption %s)",
        settings.app_name,
        settings.environment,
        "available" if app.state.key_manager.available else "unavailable",
    )
    return app


app = create_app()
