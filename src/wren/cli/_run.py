"""``wren run`` — resolve an app and serve it."""

import argparse
import sys
from dataclasses import replace
from typing import Any

from wren.app import App
from wren.cli._resolve import resolve_app


def apply_overrides(app: App, args: argparse.Namespace) -> App:
    """Fold CLI flags into the app's config. Flags win over the app's own values."""
    overrides: dict[str, Any] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.public_dir is not None:
        overrides["public_dir"] = args.public_dir
    if args.no_static:
        overrides["static_enabled"] = False
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if overrides:
        app.config = replace(app.config, **overrides)
    return app


def run_server(args: argparse.Namespace) -> None:
    """Start the wren server for ``args.app``."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    apply_overrides(app, args)
    try:
        app.run()
    except KeyboardInterrupt:
        pass
