"""Primary-selection reader backing the Ctrl+Y paste key."""

from __future__ import annotations

import shutil
import subprocess
import sys

from ..log import get_logger

SELECTION_TIMEOUT_SECONDS = 1.0

logger = get_logger("runtime.selection")


def _selection_commands() -> list[list[str]]:
    if sys.platform == "darwin":
        return [["pbpaste"]]
    return [
        ["wl-paste", "--primary", "--no-newline"],
        ["xclip", "-o", "-selection", "primary"],
        ["xsel", "--primary", "--output"],
    ]


def read_primary_selection() -> str:
    """Best-effort read of the primary selection; ``""`` when nothing is available."""
    for command in _selection_commands():
        if shutil.which(command[0]) is None:
            continue
        try:
            proc = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                timeout=SELECTION_TIMEOUT_SECONDS,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("selection command %s failed: %s", command[0], exc)
            continue
        if proc.returncode == 0 and proc.stdout:
            return proc.stdout.decode("utf-8", errors="replace")
    return ""
