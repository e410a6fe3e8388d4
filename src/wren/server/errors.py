"""Error normalisation for wren requests.

Maps dispatch outcomes to final responses. Recognised error codes are
rendered with their fixed message; anything else is logged with its
traceback and rendered as a generic 500. The cause never reaches the
response body.
"""

import logging

from wren.errors import ErrorCode, HTTPError, get_error_message, is_error_code
from wren.http.request import Request
from wren.http.response import Response, normalize
from wren.server.dispatch import Failed, Matched, Outcome

logger = logging.getLogger("wren.server")


def error_response(status: int, headers: tuple[tuple[str, str], ...] = ()) -> Response:
    """Build the response for an error code: its status and fixed message."""
    if not is_error_code(status):
        status = ErrorCode.INTERNAL_SERVER_ERROR
    response = normalize((int(status), get_error_message(status)))
    for name, value in headers:
        response = response.with_header(name, value)
    return response


def render_failure(failure: Failed, request: Request) -> Response:
    """Turn a failed outcome into its error response, logging as appropriate."""
    cause = failure.cause

    if is_error_code(failure.status) and (cause is None or isinstance(cause, HTTPError)):
        detail = cause.detail if isinstance(cause, HTTPError) else ""
        logger.debug("%d %s %s: %s", failure.status, request.method, request.path, detail)
        headers = cause.headers if isinstance(cause, HTTPError) else ()
        return error_response(failure.status, headers)

    logger.error("500 %s %s", request.method, request.path, exc_info=cause)
    return error_response(ErrorCode.INTERNAL_SERVER_ERROR)


def render_outcome(outcome: Outcome, request: Request) -> Response:
    """Final response for any outcome. A bare ``NoRoute`` renders as 404."""
    match outcome:
        case Matched(response=response):
            return response
        case Failed():
            return render_failure(outcome, request)
        case _:
            return error_response(ErrorCode.NOT_FOUND)
