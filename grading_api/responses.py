"""Builders for success and failure envelopes."""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .errors import APIError, InternalError, ValidationError
from .models import ApiResponse

NO_STORE_HEADERS = {"Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate"}


def success_response(data: Any = None, message: str | None = None, status_code: int = 200) -> JSONResponse:
    payload = jsonable_encoder(data, by_alias=True, exclude_none=True)
    envelope = ApiResponse(success=True, data=payload, message=message)
    return JSONResponse(status_code=status_code, content=envelope.to_content(), headers=NO_STORE_HEADERS)


def error_response(
    error: str,
    status_code: int,
    details: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    envelope = ApiResponse(success=False, error=error, details=details)
    return JSONResponse(
        status_code=status_code,
        content=envelope.to_content(),
        headers={**NO_STORE_HEADERS, **(headers or {})},
    )


def api_error_response(exc: APIError, *, expose_details: bool) -> JSONResponse:
    """
    Render a typed error.

    Validation errors always list their field errors. Internal error detail
    is only shown when ``expose_details`` is set (non-production).
    """
    details = None
    if isinstance(exc, ValidationError):
        details = exc.errors
    elif isinstance(exc, InternalError) and expose_details:
        details = exc.detail
    return error_response(exc.message, exc.status_code, details)
