"""Menu session bootstrap.

Builds the controller, layout and theme from ``MenuOptions``, acquires the
terminal and runs the matching loop. Returns the session ``Outcome``; writing
the result and choosing the exit status is left to the CLI.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..log import get_logger
from ..menu.controller import NavigationController
from ..menu.matching import Candidate
from ..menu.session import Outcome
from ..render import MenuLayout, capacity_for, input_field_width
from ..ui_theme import UITheme, resolve_theme
from .loop import RuntimeLoopCallbacks, run_menu_loop, run_message_loop
from .terminal import GRAB_ATTEMPTS, TTY_PATH, TerminalController, acquire_tty

DEFAULT_MESSAGE_TIMEOUT_SECONDS = 3.0

logger = get_logger("runtime.app")


@dataclass(frozen=True)
class MenuOptions:
    """Everything the runtime needs besides the candidate list."""

    bottom: bool = False
    case_insensitive: bool = False
    return_early: bool = False
    lines: int = 0
    min_height: int = 0
    prompt: str | None = None
    message_alignment: str | None = None
    message_timeout: float = DEFAULT_MESSAGE_TIMEOUT_SECONDS
    theme: UITheme = field(default_factory=lambda: resolve_theme(None))

    @property
    def message_mode(self) -> bool:
        return self.message_alignment is not None


def layout_factory(
    candidates: Sequence[Candidate],
    options: MenuOptions,
) -> Callable[[tuple[int, int]], MenuLayout]:
    """Return a builder mapping terminal ``(columns, rows)`` to a ``MenuLayout``."""

    def layout_for_size(size: tuple[int, int]) -> MenuLayout:
        columns, rows = size
        lines = options.lines
        if lines > 0:
            lines = max(1, min(lines, rows - 1))
        return MenuLayout(
            columns=columns,
            lines=lines,
            prompt=options.prompt,
            input_width=input_field_width(candidates, columns),
            min_height=min(options.min_height, rows),
            message_alignment=options.message_alignment,
        )

    return layout_for_size


def build_controller(
    candidates: Sequence[Candidate],
    options: MenuOptions,
    layout: MenuLayout,
) -> NavigationController:
    return NavigationController(
        candidates,
        capacity_for(layout),
        case_sensitive=not options.case_insensitive,
        return_early=options.return_early,
        message_mode=options.message_mode,
    )


def run_menu(
    candidates: Sequence[Candidate],
    options: MenuOptions,
    *,
    tty_path: str = TTY_PATH,
) -> Outcome:
    """Run one interactive (or message) session on the controlling terminal."""
    # Message mode only displays; it never competes for keyboard input.
    attempts = 1 if options.message_mode else GRAB_ATTEMPTS
    terminal = TerminalController(acquire_tty(tty_path, attempts=attempts))
    try:
        layout_for_size = layout_factory(candidates, options)
        controller = build_controller(candidates, options, layout_for_size(terminal.size()))
        callbacks = RuntimeLoopCallbacks(layout_for_size=layout_for_size)
        logger.debug(
            "starting %s session with %d candidates",
            "message" if options.message_mode else "menu",
            len(candidates),
        )
        if options.message_mode:
            with terminal.display_only():
                return run_message_loop(
                    controller,
                    terminal,
                    options.theme,
                    callbacks,
                    timeout_seconds=options.message_timeout,
                    bottom=options.bottom,
                )
        with terminal.raw_mode():
            return run_menu_loop(controller, terminal, options.theme, callbacks, bottom=options.bottom)
    finally:
        terminal.close()
