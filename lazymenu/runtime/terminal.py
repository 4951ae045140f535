"""Terminal control helpers for the menu session.

The menu talks to the controlling terminal directly (``/dev/tty``) because
stdin carries the candidate list and stdout carries the result. This module
owns acquiring that terminal, raw-mode lifecycle, alternate-screen switching
and painting rendered rows.
"""

from __future__ import annotations

import contextlib
import os
import termios
import time
import tty

from ..errors import TerminalUnavailableError
from ..log import get_logger
from ..render import RenderedMenu

TTY_PATH = "/dev/tty"
GRAB_ATTEMPTS = 1000
GRAB_DELAY_SECONDS = 0.001
DEFAULT_SIZE = (80, 24)

logger = get_logger("runtime.terminal")


def acquire_tty(
    path: str = TTY_PATH,
    attempts: int = GRAB_ATTEMPTS,
    delay_seconds: float = GRAB_DELAY_SECONDS,
) -> int:
    """Open and check the controlling terminal, retrying a bounded number of times."""
    last_error: Exception | None = None
    for _attempt in range(max(1, attempts)):
        fd: int | None = None
        try:
            fd = os.open(path, os.O_RDWR | os.O_NOCTTY)
            termios.tcgetattr(fd)
            return fd
        except (OSError, termios.error) as exc:
            last_error = exc
            if fd is not None:
                os.close(fd)
            time.sleep(delay_seconds)
    logger.debug("giving up on %s after %d attempts: %s", path, attempts, last_error)
    raise TerminalUnavailableError("cannot grab keyboard") from last_error


class TerminalController:
    """Manage terminal mode transitions and paint menu rows."""

    def __init__(self, fd: int) -> None:
        """Capture tty state for ``fd``, used for both input and output."""
        self.fd = fd
        self._saved_tty_state = termios.tcgetattr(fd)

    def enter_screen(self) -> None:
        # Alternate screen with bracketed paste reporting.
        os.write(self.fd, b"\x1b[?1049h\x1b[?2004h")

    def leave_screen(self) -> None:
        os.write(self.fd, b"\x1b[?2004l\x1b[?25h\x1b[?1049l")

    def enable_tui_mode(self) -> None:
        """Enter raw mode and the alternate screen."""
        tty.setraw(self.fd, termios.TCSAFLUSH)
        self.enter_screen()

    def disable_tui_mode(self) -> None:
        """Leave the alternate screen and restore the saved tty attributes."""
        self.leave_screen()
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets interactive code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()

    @contextlib.contextmanager
    def display_only(self):
        """Alternate screen without raw input, for message mode."""
        try:
            self.enter_screen()
            yield
        finally:
            self.leave_screen()

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)``, falling back to 80x24 when unknown."""
        try:
            size = os.get_terminal_size(self.fd)
        except OSError:
            return DEFAULT_SIZE
        return max(1, size.columns), max(1, size.lines)

    def draw(self, rendered: RenderedMenu, *, bottom: bool) -> None:
        """Paint ``rendered`` at the top or bottom of the screen and place the caret."""
        _columns, term_rows = self.size()
        rows = rendered.rows[:term_rows]
        top = term_rows - len(rows) + 1 if bottom else 1
        out = ["\x1b[?25l\x1b[2J"]
        for index, row in enumerate(rows):
            out.append(f"\x1b[{top + index};1H{row}")
        if rendered.cursor_row is not None and rendered.cursor_col is not None and rendered.cursor_row < len(rows):
            out.append(f"\x1b[{top + rendered.cursor_row};{rendered.cursor_col + 1}H\x1b[?25h")
        os.write(self.fd, "".join(out).encode("utf-8"))

    def close(self) -> None:
        with contextlib.suppress(OSError):
            os.close(self.fd)
