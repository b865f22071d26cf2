"""
Shared error handling for the RepHelper identity core.

Every failure raised by the core is one of the `DomainError` subclasses
below. Each subclass fixes exactly one `ErrorKind`; callers may switch on
`exc.kind` or catch the class directly.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Any, Optional

from pydantic import BaseModel, Field


class ErrorKind(str, Enum):
    """Closed set of domain failure kinds."""
    AUTHENTICATION = "authentication"
    BAD_REQUEST = "bad_request"
    BUSINESS = "business"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    timestamp: str
    path: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)


class DomainError(Exception):
    """Base exception for all domain failures.

    Not constructible directly; raise one of the concrete kinds instead.
    """

    kind: Optional[ErrorKind] = None
    code: str = "DOMAIN_ERROR"
    status_code: int = 400

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        if self.kind is None:
            raise TypeError("DomainError is abstract; raise a concrete error kind")
        if not message:
            raise ValueError(f"{type(self).__name__} requires a message")
        self.message = message
        self.cause = cause
        self.details = details or {}
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def to_response(self, path: Optional[str] = None) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            timestamp=datetime.now(timezone.utc).isoformat(),
            path=path,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class AuthenticationError(DomainError):
    """Identity could not be established or confirmed."""

    kind = ErrorKind.AUTHENTICATION
    code = "UNAUTHORIZED"
    status_code = 401


class BadRequestError(DomainError):
    """Malformed caller input outside the auth path."""

    kind = ErrorKind.BAD_REQUEST
    code = "BAD_REQUEST"
    status_code = 400


class BusinessError(DomainError):
    """Domain rule violation."""

    kind = ErrorKind.BUSINESS
    code = "BUSINESS_ERROR"
    status_code = 422


class ConflictError(DomainError):
    """Data conflict, e.g. a duplicate resource."""

    kind = ErrorKind.CONFLICT
    code = "CONFLICT"
    status_code = 409


class ForbiddenError(DomainError):
    """Authenticated but not authorized."""

    kind = ErrorKind.FORBIDDEN
    code = "FORBIDDEN"
    status_code = 403


class NotFoundError(DomainError):
    """Resource absent."""

    kind = ErrorKind.NOT_FOUND
    code = "NOT_FOUND"
    status_code = 404


class ValidationError(DomainError):
    """Field-level input validation failure."""

    kind = ErrorKind.VALIDATION
    code = "VALIDATION_ERROR"
    status_code = 400


ERRORS_BY_KIND: Dict[ErrorKind, type] = {
    cls.kind: cls
    for cls in (
        AuthenticationError,
        BadRequestError,
        BusinessError,
        ConflictError,
        ForbiddenError,
        NotFoundError,
        ValidationError,
    )
}


def error_for_kind(
    kind: ErrorKind,
    message: str,
    cause: Optional[BaseException] = None,
    details: Optional[Dict[str, Any]] = None,
) -> DomainError:
    """Build the concrete error for a kind tag."""
    return ERRORS_BY_KIND[kind](message, cause=cause, details=details)
