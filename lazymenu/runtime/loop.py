"""Interactive event loops for the menu.

Coordinates resize bookkeeping, rendering, and key dispatch. Feature logic
lives in the navigation controller; this loop only wires terminal input to
actions and returns the controller's ``Outcome`` to the caller.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from ..input import SELECTION_PASTE_KEYS, action_for_key, read_key
from ..menu import actions
from ..menu.actions import Action
from ..menu.controller import NavigationController
from ..menu.session import Outcome
from ..render import MenuLayout, capacity_for, render_menu
from ..ui_theme import UITheme
from .selection import read_primary_selection
from .terminal import TerminalController

RESIZE_POLL_MS = 100
MESSAGE_POLL_SECONDS = 0.1


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by the loops.

    ``layout_for_size`` builds the layout for ``(columns, rows)``;
    ``read_selection`` supplies text for the selection-paste key.
    """

    layout_for_size: Callable[[tuple[int, int]], MenuLayout]
    read_selection: Callable[[], str] = read_primary_selection


class _Screen:
    """Tracks terminal size and repaints the controller's session on demand."""

    def __init__(
        self,
        controller: NavigationController,
        terminal: TerminalController,
        theme: UITheme,
        bottom: bool,
        callbacks: RuntimeLoopCallbacks,
    ) -> None:
        self.controller = controller
        self.terminal = terminal
        self.theme = theme
        self.bottom = bottom
        self.callbacks = callbacks
        self.layout: MenuLayout | None = None
        self._size: tuple[int, int] | None = None
        self.dirty = True

    def sync_size(self) -> None:
        size = self.terminal.size()
        if size == self._size:
            return
        self._size = size
        self.layout = self.callbacks.layout_for_size(size)
        self.controller.set_capacity(capacity_for(self.layout))
        self.dirty = True

    def paint(self) -> None:
        self.sync_size()
        if not self.dirty or self.layout is None:
            return
        rendered = render_menu(self.controller.session, self.layout, self.theme)
        self.terminal.draw(rendered, bottom=self.bottom)
        self.dirty = False


def key_to_action(key: str, read_selection: Callable[[], str]) -> Action | None:
    """Translate a key token, resolving the selection-paste key through ``read_selection``."""
    if key in SELECTION_PASTE_KEYS:
        return actions.paste_text(read_selection())
    return action_for_key(key)


def run_menu_loop(
    controller: NavigationController,
    terminal: TerminalController,
    theme: UITheme,
    callbacks: RuntimeLoopCallbacks,
    *,
    bottom: bool = False,
) -> Outcome:
    """Run the interactive loop until the controller reports an outcome."""
    screen = _Screen(controller, terminal, theme, bottom, callbacks)
    while True:
        screen.paint()
        key = read_key(terminal.fd, timeout_ms=RESIZE_POLL_MS)
        if not key:
            continue
        action = key_to_action(key, callbacks.read_selection)
        if action is None:
            continue
        outcome = controller.dispatch(action)
        if outcome is not None:
            return outcome
        screen.dirty = True


def run_message_loop(
    controller: NavigationController,
    terminal: TerminalController,
    theme: UITheme,
    callbacks: RuntimeLoopCallbacks,
    *,
    timeout_seconds: float,
    bottom: bool = False,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> Outcome:
    """Show the candidate list until ``timeout_seconds`` pass, then dismiss it."""
    screen = _Screen(controller, terminal, theme, bottom, callbacks)
    deadline = clock() + max(0.0, timeout_seconds)
    while True:
        screen.paint()
        remaining = deadline - clock()
        if remaining <= 0:
            return controller.dismiss()
        sleep(min(remaining, MESSAGE_POLL_SECONDS))
