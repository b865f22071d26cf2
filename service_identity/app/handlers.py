"""
FastAPI glue: request context, error mapping and the current-identity dependency.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from shared.errors import AuthenticationError, DomainError, ErrorResponse
from shared.logging import clear_context, get_logger, set_request_id
from .resolution import IdentityInfo
from .service import IdentityService

logger = get_logger("identity.handlers")

bearer_scheme = HTTPBearer(auto_error=False)

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128


def install_request_context(app: FastAPI) -> None:
    """Bind a request id to every log line emitted while serving a request.

    The caller's ``X-Request-ID`` is reused when present, otherwise a new
    one is generated. The id is echoed back in the response headers.
    """

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        incoming = request.headers.get(REQUEST_ID_HEADER, "").strip()
        if len(incoming) > MAX_REQUEST_ID_LENGTH:
            incoming = ""
        request_id = set_request_id(incoming or None)
        try:
            response = await call_next(request)
        finally:
            clear_context()
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def install_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to their HTTP status and a safe error body.

    Also installs the request-context middleware.
    """

    install_request_context(app)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        logger.warning(
            "Domain error",
            code=exc.code,
            message=exc.message,
            path=request.url.path,
            cause=type(exc.cause).__name__ if exc.cause else None
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_response(path=request.url.path).model_dump()
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception", error=str(exc), path=request.url.path, exc_info=True)
        body = ErrorResponse(
            code="INTERNAL_SERVER_ERROR",
            message="An unexpected error occurred",
            timestamp=datetime.now(timezone.utc).isoformat(),
            path=request.url.path,
        )
        return JSONResponse(status_code=500, content=body.model_dump())


def get_identity_service(request: Request) -> IdentityService:
    service = getattr(request.app.state, "identity_service", None)
    if service is None:
        raise RuntimeError("identity_service is not configured on app.state")
    return service


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    service: IdentityService = Depends(get_identity_service),
) -> IdentityInfo:
    """FastAPI dependency resolving the caller's identity from the bearer token."""
    if credentials is None:
        raise AuthenticationError("Invalid token: authorization header is missing")
    return await service.authenticate(credentials.credentials)
