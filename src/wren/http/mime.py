"""Content-type detection for static files.

Built on the stdlib ``mimetypes`` table with a few web types it lacks
on some platforms. Text-like types carry an explicit UTF-8 charset.
"""

import mimetypes
from pathlib import PurePath

DEFAULT_CONTENT_TYPE = "application/octet-stream"

_EXTRA_TYPES: dict[str, str] = {
    ".css": "text/css",
    ".js": "text/javascript",
    ".mjs": "text/javascript",
    ".json": "application/json",
    ".map": "application/json",
    ".md": "text/markdown",
    ".svg": "image/svg+xml",
    ".wasm": "application/wasm",
    ".webmanifest": "application/manifest+json",
    ".webp": "image/webp",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
}

_CHARSET_TYPES = frozenset(
    {
        "application/javascript",
        "application/json",
        "application/manifest+json",
        "application/xml",
        "image/svg+xml",
    }
)


def _with_charset(mime: str) -> str:
    if mime.startswith("text/") or mime in _CHARSET_TYPES:
        return f"{mime}; charset=utf-8"
    return mime


def content_type(path: str | PurePath) -> str | None:
    """Return the content type for *path*'s extension, or ``None`` if unknown.

    Accepts a bare extension (``".css"``) as well as a file path.
    """
    name = str(path)
    suffix = name if name.startswith(".") and "/" not in name else PurePath(name).suffix
    suffix = suffix.lower()
    mime = _EXTRA_TYPES.get(suffix)
    if mime is None:
        mime, _ = mimetypes.guess_type(f"file{suffix}", strict=False)
    if mime is None:
        return None
    return _with_charset(mime)


def detected_content_type(path: str | PurePath) -> dict[str, str]:
    """Content-type headers for a file, defaulting to ``application/octet-stream``."""
    return {"Content-Type": content_type(path) or DEFAULT_CONTENT_TYPE}
