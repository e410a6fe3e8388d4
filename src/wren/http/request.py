"""Immutable HTTP request and the per-request handler context.

Frozen metadata with async body access. Handlers never see the request
itself; they get a ``Context`` built fresh for each dispatch.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from wren._internal.asgi import Receive, Scope
from wren.errors import PayloadTooLarge
from wren.http.headers import Headers
from wren.routing.route import Method


def split_target(target: str) -> tuple[str, str]:
    """Split a raw request target into ``(path, search)`` at the first ``?``.

    ``search`` excludes the ``?`` and is ``""`` when absent::

        split_target("/a?b=1?c")  # ("/a", "b=1?c")
        split_target("/a")        # ("/a", "")
    """
    path, _, search = target.partition("?")
    return path, search


@dataclass(frozen=True, slots=True)
class Context:
    """What a handler receives: the matched path, method, and parsed params."""

    path: str
    method: Method
    params: dict[str, Any]


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers) is frozen at creation. The body is
    read on demand via ``await request.body()`` and cached.
    """

    method: str
    path: str
    search: str
    headers: Headers
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    # Private: ASGI receive callable for body streaming
    _receive: Receive | None = field(default=None, repr=False, compare=False)

    # Private: body cache (the dict stays mutable inside the frozen instance)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def target(self) -> str:
        """Path plus query string, as the client sent it."""
        if self.search:
            return f"{self.path}?{self.search}"
        return self.path

    async def stream(self) -> AsyncIterator[bytes]:
        """Stream the request body in chunks."""
        if self._receive is None:
            return
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                break
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def body(self, *, limit: int | None = None) -> bytes:
        """Read the full request body.

        Raises ``PayloadTooLarge`` once more than *limit* bytes arrive.
        Result is cached: the ASGI receive is consumed once.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks: list[bytes] = []
        size = 0
        async for chunk in self.stream():
            size += len(chunk)
            if limit is not None and size > limit:
                msg = f"Request body exceeds {limit} bytes"
                raise PayloadTooLarge(msg)
            chunks.append(chunk)
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        client = scope.get("client")
        raw_path = scope.get("raw_path")
        # Routes match the path as sent; ``scope["path"]`` is already percent-decoded.
        path = split_target(raw_path.decode("latin-1"))[0] if raw_path else scope["path"]
        return cls(
            method=scope["method"],
            path=path,
            search=scope.get("query_string", b"").decode("latin-1"),
            headers=Headers(scope.get("headers", ())),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )
