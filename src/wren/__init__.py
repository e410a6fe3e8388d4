"""Wren — a minimal async HTTP framework.

Exact-path routes keyed by method, body parsing by content type,
static files as the fallback, and one uniform response shape.

Basic usage::

    from wren import App, get

    app = App()
    app.handle(get("/hi", lambda ctx: (200, "hello")))
    app.run()

Handlers receive a ``Context`` (path, method, params) and may be sync or
async. Anything not routed is looked up under ``public/``.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "BadRequest",
    "ConfigurationError",
    "Context",
    "DEFAULT_PORT",
    "ErrorCode",
    "HTTPError",
    "Method",
    "NotFound",
    "Request",
    "Response",
    "Route",
    "WrenError",
    "content_type",
    "delete",
    "detected_content_type",
    "get",
    "link",
    "options",
    "patch",
    "post",
    "put",
    "serve",
    "unlink",
]

_ROUTE_NAMES = (
    "Method",
    "Route",
    "delete",
    "get",
    "link",
    "options",
    "patch",
    "post",
    "put",
    "unlink",
)
_ERROR_NAMES = (
    "BadRequest",
    "ConfigurationError",
    "ErrorCode",
    "HTTPError",
    "NotFound",
    "WrenError",
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name in ("App", "serve"):
        from wren import app as _app

        return getattr(_app, name)

    if name in ("AppConfig", "DEFAULT_PORT"):
        from wren import config as _config

        return getattr(_config, name)

    if name in ("Context", "Request"):
        from wren.http import request as _request

        return getattr(_request, name)

    if name == "Response":
        from wren.http.response import Response

        return Response

    if name in ("content_type", "detected_content_type"):
        from wren.http import mime as _mime

        return getattr(_mime, name)

    if name in _ROUTE_NAMES:
        from wren.routing import route as _route

        return getattr(_route, name)

    if name in _ERROR_NAMES:
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
