"""HTTP response triple and handler-result normalisation.

A ``Response`` is (status, headers, body). Handlers may return one
directly or use a shorthand; ``normalize()`` turns every accepted shape
into the same wire-ready ``Response`` with Content-Type and
Content-Length filled in.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from anyio import AsyncFile

TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"
BINARY_CONTENT_TYPE = "application/octet-stream"


class FileBody:
    """An open file handed to the sender as a lazily-read byte source.

    Nothing is read until the sender iterates ``chunks()``; the file is
    closed once iteration ends, whether it finished or failed.
    """

    __slots__ = ("_file", "chunk_size", "path", "size")

    def __init__(
        self,
        file: AsyncFile[bytes],
        *,
        path: str,
        size: int,
        chunk_size: int = 64 * 1024,
    ) -> None:
        self._file = file
        self.path = path
        self.size = size
        self.chunk_size = chunk_size

    def __repr__(self) -> str:
        return f"FileBody({self.path!r}, size={self.size})"

    async def chunks(self) -> AsyncIterator[bytes]:
        """Yield the file contents in ``chunk_size`` pieces, then close it."""
        try:
            while chunk := await self._file.read(self.chunk_size):
                yield chunk
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        await self._file.aclose()


type Body = str | bytes | FileBody | None


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response triple built through immutable transformations."""

    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()
    body: Body = None

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with *name* set to *value* (replacing any previous value)."""
        kept = tuple((k, v) for k, v in self.headers if k.lower() != name.lower())
        return replace(self, headers=(*kept, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with every header in *headers* set."""
        response = self
        for name, value in headers.items():
            response = response.with_header(name, value)
        return response

    # -- Lookups --

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return default

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes. File bodies must be streamed, not read here."""
        if isinstance(self.body, FileBody):
            msg = "File bodies are streamed by the sender; iterate body.chunks() instead."
            raise TypeError(msg)
        if self.body is None:
            return b""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        return self.body_bytes.decode("utf-8")

    def json(self) -> Any:
        """Body parsed as JSON."""
        return json_module.loads(self.body_bytes)


def _encode_body(body: Any) -> tuple[Body, str | None]:
    """Convert a handler body into a wire body plus its default content type."""
    match body:
        case None:
            return None, None
        case FileBody():
            return body, BINARY_CONTENT_TYPE
        case str():
            return body, TEXT_CONTENT_TYPE
        case bytes() | bytearray() | memoryview():
            return bytes(body), BINARY_CONTENT_TYPE
        case dict() | list():
            return json_module.dumps(body), JSON_CONTENT_TYPE
        case _:
            msg = f"Unsupported response body type: {type(body).__name__}"
            raise TypeError(msg)


def _finalize(
    status: Any,
    headers: Mapping[str, str] | tuple[tuple[str, str], ...],
    body: Any,
) -> Response:
    if isinstance(status, bool) or not isinstance(status, int):
        msg = f"Response status must be an int, got {status!r}"
        raise TypeError(msg)

    wire_body, default_type = _encode_body(body)
    pairs = tuple(headers.items()) if isinstance(headers, Mapping) else tuple(headers)
    response = Response(status=int(status), headers=pairs, body=wire_body)

    if default_type is not None and response.header("content-type") is None:
        response = response.with_header("Content-Type", default_type)

    if isinstance(wire_body, FileBody):
        if response.header("content-length") is None:
            response = response.with_header("Content-Length", str(wire_body.size))
    else:
        response = response.with_header("Content-Length", str(len(response.body_bytes)))
    return response


def normalize(value: Any) -> Response:
    """Convert a handler's return value into a wire-ready Response.

    Accepted shapes:

    1. ``Response``                    -> headers completed, otherwise unchanged
    2. ``(status, headers, body)``     -> the full triple
    3. ``(status, body)``              -> shorthand, default headers for the body
    4. ``str`` / ``bytes``             -> 200 with default headers
    5. ``dict`` / ``list``             -> 200, serialised as JSON

    ``Content-Length`` is always computed for in-memory bodies.
    Raises ``TypeError`` for anything else.
    """
    match value:
        case Response():
            return _finalize(value.status, value.headers, value.body)
        case (status, Mapping() as headers, body) if isinstance(value, tuple):
            return _finalize(status, headers, body)
        case (status, body) if isinstance(value, tuple):
            return _finalize(status, (), body)
        case str() | bytes() | dict() | list():
            return _finalize(200, (), value)
        case _:
            msg = (
                f"Handler returned {type(value).__name__}; expected a Response, "
                "(status, body), (status, headers, body), str, bytes, dict, or list."
            )
            raise TypeError(msg)
