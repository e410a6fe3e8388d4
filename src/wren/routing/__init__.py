"""Routing — exact-path route table compiled into an immutable snapshot.

Routes are registered during setup and frozen when the app starts serving.
"""

from wren.routing.route import (
    Handler,
    Method,
    Route,
    delete,
    get,
    link,
    options,
    patch,
    post,
    put,
    unlink,
)
from wren.routing.router import RouteTable

__all__ = [
    "Handler",
    "Method",
    "Route",
    "RouteTable",
    "delete",
    "get",
    "link",
    "options",
    "patch",
    "post",
    "put",
    "unlink",
]
