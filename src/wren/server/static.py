"""Static file fallback.

Serves files from the public directory when no route matched. A
directory resolves to its ``index.html``. Request paths are percent-decoded
here, not before routing. Every filesystem failure is a miss, never an error.

The stat and the open are separate calls: the file may change between
them. That is accepted; whatever is open at send time is what streams.
"""

import stat
from pathlib import Path
from urllib.parse import unquote

import anyio

from wren.http.mime import detected_content_type
from wren.http.response import FileBody, Response


class StaticResolver:
    """Resolve request paths to files under a public directory.

    Usage::

        resolver = StaticResolver("public")
        response = await resolver.resolve("/docs/")  # public/docs/index.html, or None

    Security: the resolved path must stay inside the public directory;
    anything that escapes it (``..``, symlinks out) is a miss.
    """

    __slots__ = ("_chunk_size", "_directory", "_index", "_root")

    def __init__(
        self,
        directory: str | Path,
        *,
        index: str = "index.html",
        chunk_size: int = 64 * 1024,
    ) -> None:
        self._directory = Path(directory)
        self._root = self._directory.resolve()
        self._index = index
        self._chunk_size = chunk_size

    @property
    def directory(self) -> Path:
        return self._directory

    async def _stat(self, path: anyio.Path) -> tuple[anyio.Path, int, int] | None:
        """Resolve and stat *path*; ``None`` if it is missing or outside the root."""
        try:
            resolved = await path.resolve()
            if not Path(resolved).is_relative_to(self._root):
                return None
            info = await resolved.stat()
        except (OSError, ValueError):
            # ValueError: the path cannot name a file (e.g. an embedded NUL).
            return None
        return resolved, info.st_mode, info.st_size

    async def resolve(self, path: str) -> Response | None:
        """Return a 200 file response for *path*, or ``None`` if nothing matches.

        The response body is a ``FileBody`` over an already-open file;
        contents are read only as the sender streams them.
        """
        found = await self._stat(anyio.Path(f"{self._directory}{unquote(path)}"))
        if found is None:
            return None

        target, mode, size = found
        if stat.S_ISDIR(mode):
            found = await self._stat(target / self._index)
            if found is None:
                return None
            target, mode, size = found

        if not stat.S_ISREG(mode):
            return None

        try:
            file = await anyio.open_file(target, "rb")
        except (OSError, ValueError):
            return None

        headers = {"Content-Length": str(size), **detected_content_type(str(target))}
        body = FileBody(file, path=str(target), size=size, chunk_size=self._chunk_size)
        return Response(status=200, headers=tuple(headers.items()), body=body)
