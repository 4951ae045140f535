"""JSON config defaults.

An optional ``config.json`` in the platform config directory supplies
defaults for command-line options. The file is only read, never written.
Malformed or missing config falls back to built-in defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..log import get_logger

APP_NAME = "lazymenu"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

logger = get_logger("runtime.config")


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _bool(data: dict[str, object], key: str) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else False


def _nonnegative_int(data: dict[str, object], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(0, value)


def _string(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class MenuDefaults:
    """Option defaults sourced from the config file."""

    theme: str | None = None
    lines: int = 0
    bottom: bool = False
    case_insensitive: bool = False
    return_early: bool = False
    prompt: str | None = None
    normal_background: str | None = None
    normal_foreground: str | None = None
    selected_background: str | None = None
    selected_foreground: str | None = None


def load_menu_defaults() -> MenuDefaults:
    """Read option defaults, ignoring keys with the wrong JSON type."""
    data = load_config()
    return MenuDefaults(
        theme=_string(data, "theme"),
        lines=_nonnegative_int(data, "lines"),
        bottom=_bool(data, "bottom"),
        case_insensitive=_bool(data, "case_insensitive"),
        return_early=_bool(data, "return_early"),
        prompt=_string(data, "prompt"),
        normal_background=_string(data, "normal_background"),
        normal_foreground=_string(data, "normal_foreground"),
        selected_background=_string(data, "selected_background"),
        selected_foreground=_string(data, "selected_foreground"),
    )
