"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_PORT = 8080


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, public_dir="site")
    """

    # Server (pounce)
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    workers: int = 1

    # Static fallback
    static_enabled: bool = True
    public_dir: str | Path = "public"
    chunk_size: int = 64 * 1024  # bytes read per static-file body message

    # Limits
    max_content_length: int = 16 * 1024 * 1024  # 16 MB

    # Logging
    log_level: str = "info"
