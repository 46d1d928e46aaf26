"""
Service API — Application Errors
=================================

What:  The application error type raised by handlers and services.
How:   A single AppError carries an ErrorKind tag plus a stable numeric code
       and a human-readable message. The global exception handlers
       (registered in main.py) hand every error to error_mapper.map_error(),
       which turns the kind into an HTTP status and the code/message into the
       `{code, message}` response body.
Who:   Raised by services and route handlers; never formatted by them.

Error kinds:
    ErrorKind.UNAUTHORIZED           → 401
    ErrorKind.NOT_FOUND              → 404
    ErrorKind.BAD_REQUEST            → 400
    ErrorKind.INTERNAL_SERVER_ERROR  → 500

Errors raised without an explicit code use GENERIC_ERROR_CODE (1000), the
same code the mapper assigns to framework and uncaught faults.
"""

from enum import Enum

GENERIC_ERROR_CODE = 1000
BOOKS_CALL_FAILED_CODE = 1002


class ErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    INTERNAL_SERVER_ERROR = "internal_server_error"


class AppError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        kind:     Which HTTP-facing category the error belongs to
        code:     Application code returned in the response body
        message:  User-facing error description (returned in the response body)
    """

    kind: ErrorKind = ErrorKind.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        code: int = GENERIC_ERROR_CODE,
        message: str = "Generic error",
        kind: ErrorKind | None = None,
    ):
        if kind is not None:
            self.kind = kind
        self.code = code
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value}, code={self.code}, message={self.message!r})"


class UnauthorizedError(AppError):
    """The caller is not allowed to perform the request (401)."""

    kind = ErrorKind.UNAUTHORIZED


class NotFoundError(AppError):
    """A resource the handler looked up does not exist (404)."""

    kind = ErrorKind.NOT_FOUND


class BadRequestError(AppError):
    """The request is well-formed HTTP but semantically invalid (400)."""

    kind = ErrorKind.BAD_REQUEST


class InternalServerError(AppError):
    """
    The handler could not complete because of a server-side fault (500).

    Raised with BOOKS_CALL_FAILED_CODE when the downstream books service
    cannot be reached or answers with an error.
    """

    kind = ErrorKind.INTERNAL_SERVER_ERROR
