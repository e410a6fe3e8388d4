"""Route descriptors, the method enumeration, and registration helpers."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeAlias

# Route handler: receives a Context, returns a response value (sync or async)
Handler: TypeAlias = Callable[..., Any]


class Method(StrEnum):
    """HTTP methods a route can be registered for."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    LINK = "LINK"
    UNLINK = "UNLINK"


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition: one handler for one (method, exact path)."""

    path: str
    method: Method
    handler: Handler

    def __post_init__(self) -> None:
        # Accept plain strings ("GET") and normalise to the enum.
        object.__setattr__(self, "method", Method(self.method))


def get(path: str, handler: Handler) -> Route:
    """Describe a GET route."""
    return Route(path, Method.GET, handler)


def post(path: str, handler: Handler) -> Route:
    """Describe a POST route."""
    return Route(path, Method.POST, handler)


def put(path: str, handler: Handler) -> Route:
    """Describe a PUT route."""
    return Route(path, Method.PUT, handler)


def patch(path: str, handler: Handler) -> Route:
    """Describe a PATCH route."""
    return Route(path, Method.PATCH, handler)


def delete(path: str, handler: Handler) -> Route:
    """Describe a DELETE route."""
    return Route(path, Method.DELETE, handler)


def options(path: str, handler: Handler) -> Route:
    """Describe an OPTIONS route."""
    return Route(path, Method.OPTIONS, handler)


def link(path: str, handler: Handler) -> Route:
    """Describe a LINK route."""
    return Route(path, Method.LINK, handler)


def unlink(path: str, handler: Handler) -> Route:
    """Describe an UNLINK route."""
    return Route(path, Method.UNLINK, handler)
