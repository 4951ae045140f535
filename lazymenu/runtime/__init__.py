"""Public runtime orchestration entry points.

This package groups the session bootstrap (`run_menu`) and the lower-level
event loop contracts used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .app import MenuOptions
    from .loop import RuntimeLoopCallbacks


def run_menu(*args, **kwargs):
    """Lazily import the session bootstrap to keep package imports lightweight."""
    from .app import run_menu as _run_menu

    return _run_menu(*args, **kwargs)


def __getattr__(name: str):
    if name == "MenuOptions":
        from . import app as _app

        return _app.MenuOptions
    if name == "RuntimeLoopCallbacks":
        from . import loop as _loop

        return _loop.RuntimeLoopCallbacks
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "MenuOptions",
    "RuntimeLoopCallbacks",
    "run_menu",
]
