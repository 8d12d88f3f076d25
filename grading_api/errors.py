"""
Typed error hierarchy for the grading API.

Services raise these with an explicit kind; the exception handlers in
``api.py`` map the kind to an HTTP status without reading the message.
"""

from enum import Enum

from .models import FieldError


class ErrorKind(str, Enum):
    """Error categories understood by the response layer."""

    VALIDATION = "validation"
    BAD_REQUEST = "bad_request"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


class APIError(Exception):
    """Base class for every error rendered as a failure envelope."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationError(APIError):
    """Client input failed one or more schema constraints."""

    kind = ErrorKind.VALIDATION

    def __init__(self, errors: list[FieldError], message: str = "Datos de entrada inválidos"):
        super().__init__(message)
        self.errors = errors


class BadRequestError(APIError):
    """Input was well-formed but the operation is not allowed."""

    kind = ErrorKind.BAD_REQUEST


class AuthenticationError(APIError):
    kind = ErrorKind.AUTHENTICATION

    def __init__(self, message: str = "Invalid API key"):
        super().__init__(message)


class NotFoundError(APIError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(APIError):
    kind = ErrorKind.CONFLICT


class InternalError(APIError):
    """Unexpected failure; the original exception is kept for logging and debug detail."""

    kind = ErrorKind.INTERNAL

    def __init__(self, original: BaseException | None = None, message: str = "Internal server error"):
        super().__init__(message)
        self.original = original

    @property
    def detail(self) -> str | None:
        if self.original is None:
            return None
        return str(self.original) or type(self.original).__name__
