"""ASGI response sending — translates wren Responses to ASGI messages.

In-memory bodies go out as a single body message. File bodies stream in
chunks with ``more_body=True`` and are always closed afterwards.
"""

import anyio

from wren._internal.asgi import Send
from wren.http.response import FileBody, Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def _raw_headers(response: Response, *, body_allowed: bool) -> list[tuple[bytes, bytes]]:
    raw: list[tuple[bytes, bytes]] = []
    for name, value in response.headers:
        lowered = name.lower()
        if lowered == "content-length" and not body_allowed:
            continue
        raw.append((lowered.encode("latin-1"), value.encode("latin-1")))
    if not body_allowed:
        raw.append((b"content-length", b"0"))
    return raw


async def send_response(response: Response, send: Send, *, include_body: bool = True) -> None:
    """Translate a wren Response into ASGI send() calls.

    ``include_body=False`` (HEAD requests) keeps the headers, including
    Content-Length, and sends an empty body.
    """
    body_allowed = _body_allowed(response.status)
    body = response.body

    try:
        await send(
            {
                "type": "http.response.start",
                "status": response.status,
                "headers": _raw_headers(response, body_allowed=body_allowed),
            }
        )

        if isinstance(body, FileBody):
            if body_allowed and include_body:
                async for chunk in body.chunks():
                    await send({"type": "http.response.body", "body": chunk, "more_body": True})
            await send({"type": "http.response.body", "body": b"", "more_body": False})
        else:
            payload = response.body_bytes if body_allowed and include_body else b""
            await send({"type": "http.response.body", "body": payload})
    finally:
        if isinstance(body, FileBody):
            with anyio.CancelScope(shield=True):
                await body.aclose()
