"""ASGI handler — runs one request through the wren pipeline.

RECEIVED -> route match -> handler or static fallback -> response or
error -> sent. Every request ends with exactly one complete response,
whatever failed along the way.
"""

from wren._internal.asgi import Receive, Scope, Send
from wren.errors import ErrorCode
from wren.http.request import Request
from wren.http.response import normalize
from wren.routing.router import RouteTable
from wren.server.dispatch import Failed, Matched, NoRoute, Outcome, dispatch
from wren.server.errors import render_outcome
from wren.server.sender import send_response
from wren.server.static import StaticResolver


async def _static_fallback(request: Request, static: StaticResolver | None) -> Outcome:
    if static is None:
        return Failed(ErrorCode.NOT_FOUND)
    response = await static.resolve(request.path)
    if response is None:
        return Failed(ErrorCode.NOT_FOUND)
    return Matched(normalize(response))


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    table: RouteTable,
    static: StaticResolver | None = None,
    max_content_length: int | None = None,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        outcome = await dispatch(request, table, max_content_length=max_content_length)
        if isinstance(outcome, NoRoute):
            outcome = await _static_fallback(request, static)
    except Exception as exc:
        outcome = Failed(ErrorCode.INTERNAL_SERVER_ERROR, exc)

    response = render_outcome(outcome, request)
    await send_response(response, send, include_body=request.method != "HEAD")
