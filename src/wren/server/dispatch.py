"""Request dispatch — resolve one request against the route table.

Returns a tagged outcome instead of raising across pipeline stages:

- ``Matched(response)`` — a handler ran and its result was normalised
- ``NoRoute``           — no (method, path) entry, or the handler returned ``None``
- ``Failed(status)``    — the body was malformed or the handler failed

The underlying exception travels on ``Failed.cause`` so the error
normaliser can log it; it never reaches the client.
"""

import codecs
import json as json_module
from dataclasses import dataclass
from typing import Any

from wren._internal.invoke import invoke
from wren.errors import BadRequest, ErrorCode, HTTPError
from wren.http.headers import parse_content_type
from wren.http.params import parse_params
from wren.http.request import Context, Request
from wren.http.response import Response, normalize
from wren.routing.route import Method
from wren.routing.router import RouteTable

DEFAULT_REQUEST_CONTENT_TYPE = "application/octet-stream"
DEFAULT_CHARSET = "utf-8"


@dataclass(frozen=True, slots=True)
class Matched:
    """A handler produced a response."""

    response: Response


@dataclass(frozen=True, slots=True)
class NoRoute:
    """No route matched; not an error."""


@dataclass(frozen=True, slots=True)
class Failed:
    """Dispatch failed with an HTTP status.

    ``cause`` is the exception behind the failure, if any.
    """

    status: int
    cause: BaseException | None = None


type Outcome = Matched | NoRoute | Failed

NO_ROUTE = NoRoute()


def _decode(raw: bytes, charset: str) -> str:
    try:
        codecs.lookup(charset)
    except LookupError:
        msg = f"Unknown charset {charset!r}"
        raise BadRequest(msg) from None
    return raw.decode(charset, errors="replace")


async def parse_body(request: Request, *, limit: int | None = None) -> dict[str, Any]:
    """Read the request body and parse it according to its Content-Type.

    - ``application/x-www-form-urlencoded`` -> URL-decoded params
    - ``application/json``                  -> the decoded JSON object (other values: ``{}``)
    - anything else                         -> ``{}`` (raw body not exposed)

    The base type match is case-sensitive and ignores parameters; the
    ``charset`` parameter selects the text decoding (default UTF-8).

    Raises ``BadRequest`` for malformed JSON or an unknown charset, and
    ``PayloadTooLarge`` past *limit* bytes.
    """
    base, type_params = parse_content_type(request.content_type or DEFAULT_REQUEST_CONTENT_TYPE)
    raw = await request.body(limit=limit)
    charset = type_params.get("charset", DEFAULT_CHARSET)

    match base:
        case "application/x-www-form-urlencoded":
            return parse_params(_decode(raw, charset))
        case "application/json":
            text = _decode(raw, charset)
            try:
                value = json_module.loads(text)
            except ValueError as exc:
                msg = f"Malformed JSON body: {exc}"
                raise BadRequest(msg) from exc
            # Only an object maps onto params; other JSON values leave them empty.
            return value if isinstance(value, dict) else {}
        case _:
            # Octet-stream and unknown types: params stay empty.
            return {}


async def dispatch(
    request: Request,
    table: RouteTable,
    *,
    max_content_length: int | None = None,
) -> Outcome:
    """Resolve *request* to an outcome.

    GET requests take their params from the query string; every other
    method reads and parses the body. Body errors abort before the
    handler runs. Handlers may be sync or async; both are awaited
    through ``invoke()``. A handler that returns ``None`` produced nothing,
    so the request falls through to the static fallback like a miss.
    """
    route = table.lookup(request.method, request.path)
    if route is None:
        return NO_ROUTE

    try:
        if route.method is Method.GET:
            params: dict[str, Any] = parse_params(request.search) if request.search else {}
        else:
            params = await parse_body(request, limit=max_content_length)
    except HTTPError as exc:
        return Failed(exc.status, exc)

    ctx = Context(path=request.path, method=route.method, params=params)
    try:
        result = await invoke(route.handler, ctx)
        if result is None:
            return NO_ROUTE
        return Matched(normalize(result))
    except HTTPError as exc:
        return Failed(exc.status, exc)
    except Exception as exc:
        return Failed(ErrorCode.INTERNAL_SERVER_ERROR, exc)
