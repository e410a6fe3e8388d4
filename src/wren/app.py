"""Wren application class.

Mutable during setup (route registration).
Frozen at runtime when the app first serves or is called via ASGI.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Any

import anyio
from anyio.abc import TaskStatus

from wren._internal.asgi import Receive, Scope, Send
from wren.config import AppConfig
from wren.routing.route import Handler, Method, Route
from wren.routing.router import RouteTable
from wren.server.handler import handle_request
from wren.server.listener import Listener
from wren.server.static import StaticResolver

logger = logging.getLogger("wren.app")


class App:
    """The wren application.

    Register routes, then serve::

        app = App(port=3000)
        app.handle(get("/hi", lambda ctx: (200, "hello")))

        @app.route("/echo", method="POST")
        async def echo(ctx):
            return ctx.params

        app.run()

    Thread safety:
        The setup phase is single-threaded. Freezing compiles the route
        table into a read-only snapshot exactly once (lock + double check);
        after that every request reads the same snapshot without locking.
    """

    __slots__ = ("_freeze_lock", "_frozen", "_listener", "_static", "_table", "config")

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        port: int | None = None,
        static_enabled: bool | None = None,
        public_dir: str | Path | None = None,
    ) -> None:
        config = config or AppConfig()
        overrides: dict[str, Any] = {
            name: value
            for name, value in (
                ("port", port),
                ("static_enabled", static_enabled),
                ("public_dir", public_dir),
            )
            if value is not None
        }
        self.config: AppConfig = replace(config, **overrides) if overrides else config
        self._table = RouteTable()
        self._static: StaticResolver | None = None
        self._listener: Listener | None = None
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Route registration --

    def handle(self, *routes: Route) -> None:
        """Register any number of route descriptors.

        A later route for the same (method, path) replaces the earlier one.
        """
        self._check_not_frozen()
        for route in routes:
            self._table.add(route)

    def route(
        self,
        path: str,
        *,
        method: Method | str = Method.GET,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator."""

        def decorator(func: Handler) -> Handler:
            self.handle(Route(path, Method(method), func))
            return func

        return decorator

    @property
    def routes(self) -> list[Route]:
        """All registered routes."""
        return self._table.routes

    # -- Server --

    @property
    def address(self) -> tuple[str, int] | None:
        """``(host, port)`` while serving, else ``None``."""
        if self._listener is None or not self._listener.serving:
            return None
        return self._listener.host, self._listener.port

    async def serve(self, *, task_status: TaskStatus[int] = anyio.TASK_STATUS_IGNORED) -> None:
        """Start a pounce server on ``host:port`` and wait until ``close()``.

        Works with ``task_group.start(app.serve)``, which returns the port in use.
        """
        self._ensure_frozen()
        if self._listener is not None:
            msg = "App is already serving."
            raise RuntimeError(msg)

        self._listener = self._make_listener()
        try:
            await self._listener.serve(task_status=task_status)
        finally:
            self._listener = None

    def run(self) -> None:
        """Serve on pounce in this process until it shuts down."""
        logging.basicConfig(
            level=self.config.log_level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        self._ensure_frozen()
        self._make_listener().run()

    def close(self) -> None:
        """Stop the server started by ``serve()`` and release its socket."""
        if self._listener is not None:
            self._listener.close()

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        await handle_request(
            scope,
            receive,
            send,
            table=self._table,
            static=self._static,
            max_content_length=self.config.max_content_length,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge the ASGI lifespan protocol, freezing at startup."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _make_listener(self) -> Listener:
        return Listener(
            self,
            self.config.host,
            self.config.port,
            workers=self.config.workers,
            log_level=self.config.log_level,
        )

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        self._table.compile()

        if self.config.static_enabled:
            public_dir = Path(self.config.public_dir)
            if not public_dir.is_dir():
                logger.warning(
                    "public directory %s does not exist; static fallback will always miss",
                    public_dir,
                )
            self._static = StaticResolver(public_dir, chunk_size=self.config.chunk_size)

        self._frozen = True
        logger.debug("compiled %d routes", len(self._table))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes before calling app.run()."
            )
            raise RuntimeError(msg)


def serve(*routes: Route, config: AppConfig | None = None, **overrides: Any) -> App:
    """Build an App from *routes* and serve it, blocking until it stops.

    The one-call entry point::

        from wren import get, serve

        serve(get("/hi", lambda ctx: (200, "hello")), port=3000)
    """
    app = App(config, **overrides)
    app.handle(*routes)
    app.run()
    return app
