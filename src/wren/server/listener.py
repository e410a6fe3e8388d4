"""Server lifecycle on top of pounce.

HTTP framing (request heads, bodies, keep-alive, status lines) belongs to
pounce's ASGI server. Wren only starts it, waits until the port accepts
connections, and stops it again.

``run()`` blocks in the calling process, exactly like a pounce dev server.
``serve()`` runs the same server in a forked child so that ``close()`` can
release the socket from the event loop without a server-specific stop hook.
"""

import logging
import multiprocessing
from multiprocessing.process import BaseProcess

import anyio
import anyio.to_thread
from anyio.abc import SocketAttribute, TaskStatus

from wren._internal.asgi import ASGIApp

logger = logging.getLogger("wren.server")

_STARTUP_TIMEOUT = 10.0
_STOP_TIMEOUT = 5.0
_POLL_INTERVAL = 0.05


def _connect_host(host: str) -> str:
    """Address to connect to when checking a server bound to *host*."""
    if host in ("", "0.0.0.0"):
        return "127.0.0.1"
    if host == "::":
        return "::1"
    return host


async def free_port(host: str) -> int:
    """Ask the OS for a TCP port that is currently unused on *host*."""
    listener = await anyio.create_tcp_listener(local_host=host, local_port=0)
    async with listener:
        return listener.listeners[0].extra(SocketAttribute.local_port)


class Listener:
    """Own one pounce server for an ASGI app.

    Usage::

        listener = Listener(app, "127.0.0.1", 0)
        async with anyio.create_task_group() as tg:
            port = await tg.start(listener.serve)
            ...
            listener.close()

    Port 0 is replaced by a free port before the server starts, so the
    reported port is the one clients should use.
    """

    __slots__ = ("_app", "_process", "host", "log_level", "port", "workers")

    def __init__(
        self,
        app: ASGIApp,
        host: str,
        port: int,
        *,
        workers: int = 1,
        log_level: str = "info",
    ) -> None:
        self._app = app
        self.host = host
        self.port = port
        self.workers = workers
        self.log_level = log_level
        self._process: BaseProcess | None = None

    @property
    def serving(self) -> bool:
        return self._process is not None and self._process.is_alive()

    def run(self) -> None:
        """Run pounce in this process until it shuts down."""
        from pounce.config import ServerConfig
        from pounce.server import Server

        config = ServerConfig(
            host=self.host,
            port=self.port,
            workers=self.workers,
            reload=False,
            log_level=self.log_level,
        )
        logger.info("listening on http://%s:%d/", self.host, self.port)
        Server(config, self._app).run()

    async def serve(self, *, task_status: TaskStatus[int] = anyio.TASK_STATUS_IGNORED) -> None:
        """Start the server, report its port, and wait until ``close()``.

        Raises ``RuntimeError`` if the server exits before it accepts
        connections (for example, when the port is taken).
        """
        if self.port == 0:
            self.port = await free_port(self.host)

        context = multiprocessing.get_context("fork")
        process = context.Process(target=self.run, name=f"wren-{self.port}", daemon=True)
        process.start()
        self._process = process
        try:
            await self._wait_until_accepting(process)
            task_status.started(self.port)
            await anyio.to_thread.run_sync(process.join, abandon_on_cancel=True)
        finally:
            self._process = None
            with anyio.CancelScope(shield=True):
                await self._stop(process)
        logger.info("server on %s:%d closed", self.host, self.port)

    def close(self) -> None:
        """Stop the server and release its socket."""
        if self._process is not None and self._process.is_alive():
            self._process.terminate()

    async def _wait_until_accepting(self, process: BaseProcess) -> None:
        host = _connect_host(self.host)
        with anyio.fail_after(_STARTUP_TIMEOUT):
            while True:
                if not process.is_alive():
                    msg = (
                        f"Server on {self.host}:{self.port} exited with code "
                        f"{process.exitcode} before accepting connections"
                    )
                    raise RuntimeError(msg)
                try:
                    stream = await anyio.connect_tcp(host, self.port)
                except OSError:
                    await anyio.sleep(_POLL_INTERVAL)
                    continue
                await stream.aclose()
                return

    async def _stop(self, process: BaseProcess) -> None:
        if process.is_alive():
            process.terminate()
        await anyio.to_thread.run_sync(process.join, _STOP_TIMEOUT)
        if process.is_alive():
            logger.warning("server process %d ignored SIGTERM; killing it", process.pid)
            process.kill()
            await anyio.to_thread.run_sync(process.join)
