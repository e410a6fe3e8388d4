"""Find the App a ``wren run`` target names."""

import importlib

from wren.app import App


def resolve_app(target: str) -> App:
    """Load the App named by *target*, written ``"package.module:name"``.

    ``name`` defaults to ``app``. A callable that is not itself an App is
    treated as a factory and called once with no arguments.
    """
    module_name, _, attr = target.partition(":")
    obj = getattr(importlib.import_module(module_name), attr or "app")

    if not isinstance(obj, App) and callable(obj):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"App factory {target!r} failed: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, App):
        return obj
    msg = f"{target!r} is a {type(obj).__name__}, expected a wren.App"
    raise TypeError(msg)
