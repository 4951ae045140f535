"""Logger setup for lazymenu.

stderr belongs to the calling script and the terminal runs in raw mode, so
nothing is logged unless ``LAZYMENU_LOG`` names a file or ``LAZYMENU_DEBUG``
is set (which logs to ``lazymenu_debug.log`` in the working directory).
"""

from __future__ import annotations

import logging
import os

_LOGGER: logging.Logger | None = None
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _debug_enabled() -> bool:
    level_env = os.environ.get("LAZYMENU_DEBUG", "0").lower()
    return level_env in {"1", "true", "yes", "on", "debug"}


def _configure_root() -> logging.Logger:
    debug_enabled = _debug_enabled()
    level = logging.DEBUG if debug_enabled else logging.INFO

    logger = logging.getLogger("lazymenu")
    logger.setLevel(level)
    if logger.handlers:
        return logger

    log_path = os.environ.get("LAZYMENU_LOG")
    if log_path:
        log_path = os.path.expanduser(log_path)
    elif debug_enabled:
        log_path = os.path.join(os.getcwd(), "lazymenu_debug.log")

    if log_path:
        try:
            handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
        except OSError:
            handler = logging.NullHandler()
        else:
            handler.setLevel(level)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the ``lazymenu`` logger, configuring it on first use."""
    global _LOGGER
    if _LOGGER is None:
        _LOGGER = _configure_root()
    return _LOGGER.getChild(name)
