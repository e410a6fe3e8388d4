"""Wren exception hierarchy and the closed set of client-facing error codes.

Shared across the router, dispatcher, static resolver, and listener so
every module raises and catches the same types.
"""

from dataclasses import dataclass
from enum import IntEnum
from http import HTTPStatus


class ErrorCode(IntEnum):
    """HTTP statuses wren renders as error responses.

    Any status outside this set that reaches the error normaliser is
    treated as an unexpected failure and rendered as 500.
    """

    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    NOT_ACCEPTABLE = 406
    REQUEST_TIMEOUT = 408
    CONFLICT = 409
    GONE = 410
    PAYLOAD_TOO_LARGE = 413
    UNSUPPORTED_MEDIA_TYPE = 415
    UNPROCESSABLE_ENTITY = 422
    TOO_MANY_REQUESTS = 429
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    SERVICE_UNAVAILABLE = 503


_MESSAGES: dict[int, str] = {code.value: HTTPStatus(code.value).phrase for code in ErrorCode}


def is_error_code(status: object) -> bool:
    """True if *status* is one of the recognised ``ErrorCode`` values."""
    return isinstance(status, int) and not isinstance(status, bool) and status in _MESSAGES


def get_error_message(status: int) -> str:
    """Fixed human-readable message for an error code.

    Unknown statuses map to the Internal Server Error message.
    """
    return _MESSAGES.get(status, _MESSAGES[ErrorCode.INTERNAL_SERVER_ERROR])


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when app configuration is invalid."""


@dataclass(frozen=True, slots=True)
class HTTPError(WrenError):
    """An error that maps directly to an HTTP status code.

    Handlers raise this (or a subclass) to fail a request deliberately.
    The client sees the status and its fixed message; ``detail`` is for
    server-side logs only.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BadRequest(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """400 — the request body could not be parsed."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=ErrorCode.BAD_REQUEST, detail=detail)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — neither a route nor a static file matched."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=ErrorCode.NOT_FOUND, detail=detail)


class PayloadTooLarge(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """413 — the request body exceeds ``AppConfig.max_content_length``."""

    def __init__(self, detail: str = "Payload Too Large") -> None:
        super().__init__(status=ErrorCode.PAYLOAD_TOO_LARGE, detail=detail)


class InternalServerError(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """500 — raised explicitly by a handler."""

    def __init__(self, detail: str = "Internal Server Error") -> None:
        super().__init__(status=ErrorCode.INTERNAL_SERVER_ERROR, detail=detail)
