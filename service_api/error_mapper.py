"""
Service API — Error Mapping
============================

What:  Translates any exception that terminates a request into an HTTP status
       code and an ErrorResponse body.
How:   map_error() checks the exception against an ordered table; the first
       matching row wins. It never raises.
Who:   Called by the global exception handlers registered in main.py, and by
       RequestContextMiddleware for faults no handler caught.

Mapping table (checked top to bottom):
    AppError UNAUTHORIZED                → 401, exc.code, exc.message
    AppError NOT_FOUND                   → 404, exc.code, exc.message
    Framework 404 (no matching route)    → 404, 1000, framework detail
    AppError BAD_REQUEST                 → 400, exc.code, exc.message
    Framework 400 (malformed request)    → 400, 1000, framework detail
    Body shape mismatch / missing field  → 400, 1000, deserialization message
    Exception group wrapping a fault     → 400, 1000, inner exception message
    AppError INTERNAL_SERVER_ERROR       → 500, exc.code, exc.message
    Other framework HTTP errors          → own status, 1000, framework detail
    Anything else                        → 500, 1000, str(exc) or "Generic error"
"""

import logging
from typing import Any, Iterable, Mapping, Tuple

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from service_api.exceptions import GENERIC_ERROR_CODE, AppError, ErrorKind
from service_api.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Generic error"

_APP_ERROR_STATUS = {
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.INTERNAL_SERVER_ERROR: 500,
}


def _safe_message(exc: BaseException) -> str:
    """str(exc), or the generic message when it is empty or cannot be built."""
    try:
        message = str(exc)
    except Exception:
        return GENERIC_ERROR_MESSAGE
    return message or GENERIC_ERROR_MESSAGE


def _format_location(loc: Iterable[Any]) -> str:
    return ".".join(str(part) for part in loc)


def format_validation_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """
    Render pydantic error dicts as one line per problem.

    >>> format_validation_errors([{"loc": ("body", "surname"), "msg": "Field required"}])
    "Field required for property 'body.surname'"
    """
    parts = []
    for error in errors:
        msg = error.get("msg") or "Invalid value"
        loc = _format_location(error.get("loc") or ())
        parts.append(f"{msg} for property '{loc}'" if loc else msg)
    return "; ".join(parts) or "Invalid request body"


def _validation_message(exc: BaseException) -> str:
    try:
        return format_validation_errors(exc.errors())  # type: ignore[attr-defined]
    except Exception:
        return _safe_message(exc)


def _http_exception_message(exc: StarletteHTTPException) -> str:
    detail = exc.detail
    if isinstance(detail, str) and detail:
        return detail
    if detail:
        try:
            return str(detail)
        except Exception:
            return GENERIC_ERROR_MESSAGE
    return GENERIC_ERROR_MESSAGE


def _map_app_error(exc: AppError) -> Tuple[int, ErrorResponse]:
    status = _APP_ERROR_STATUS.get(exc.kind, 500)
    try:
        message = exc.message if isinstance(exc.message, str) and exc.message else GENERIC_ERROR_MESSAGE
        code = int(exc.code)
    except Exception:
        return status, ErrorResponse(code=GENERIC_ERROR_CODE, message=GENERIC_ERROR_MESSAGE)
    return status, ErrorResponse(code=code, message=message)


def map_error(exc: BaseException) -> Tuple[int, ErrorResponse]:
    """
    Map an exception to (HTTP status, ErrorResponse).

    Args:
        exc: The exception raised while handling a request.

    Returns:
        The status code and the body to send. Never raises.
    """
    try:
        if isinstance(exc, AppError) and exc.kind in (ErrorKind.UNAUTHORIZED, ErrorKind.NOT_FOUND):
            return _map_app_error(exc)

        if isinstance(exc, StarletteHTTPException) and exc.status_code == 404:
            return 404, ErrorResponse(code=GENERIC_ERROR_CODE, message=_http_exception_message(exc))

        if isinstance(exc, AppError) and exc.kind == ErrorKind.BAD_REQUEST:
            return _map_app_error(exc)

        if isinstance(exc, StarletteHTTPException) and exc.status_code == 400:
            return 400, ErrorResponse(code=GENERIC_ERROR_CODE, message=_http_exception_message(exc))

        if isinstance(exc, (RequestValidationError, PydanticValidationError)):
            return 400, ErrorResponse(code=GENERIC_ERROR_CODE, message=_validation_message(exc))

        if isinstance(exc, BaseExceptionGroup):
            inner = exc.exceptions[0] if exc.exceptions else exc
            return 400, ErrorResponse(code=GENERIC_ERROR_CODE, message=_safe_message(inner))

        if isinstance(exc, AppError):
            return _map_app_error(exc)

        if isinstance(exc, StarletteHTTPException):
            return exc.status_code, ErrorResponse(
                code=GENERIC_ERROR_CODE, message=_http_exception_message(exc)
            )

        return 500, ErrorResponse(code=GENERIC_ERROR_CODE, message=_safe_message(exc))
    except Exception:
        logger.exception("Error mapping failed for %s", type(exc).__name__)
        return 500, ErrorResponse(code=GENERIC_ERROR_CODE, message=GENERIC_ERROR_MESSAGE)


def error_response(exc: BaseException) -> JSONResponse:
    """Render map_error() as a JSON response."""
    status_code, body = map_error(exc)
    return JSONResponse(status_code=status_code, content=body.model_dump())
