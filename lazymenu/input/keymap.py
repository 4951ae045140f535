"""Key-token to canonical-action mapping.

Emacs-style control keys are folded onto their navigation equivalents
(Ctrl+A is Home, Ctrl+N is Down, ...). Ctrl+Y asks the runtime for the
primary selection, so it is listed in ``SELECTION_PASTE_KEYS`` instead of
mapping to an action.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from ..menu import actions
from ..menu.actions import Action, ActionKind
from .reader import PASTE_PREFIX

SELECTION_PASTE_KEYS = frozenset({"CTRL_Y"})


class Keymap:
    """Token-to-action table.

    Actions are immutable, so one instance is shared by every key bound to it.
    ``normalize`` is applied to tokens on both ``bind`` and ``lookup``.
    """

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize or str
        self._actions: dict[str, Action] = {}

    def bind(self, action: Action, *keys: str) -> Keymap:
        for key in keys:
            self._actions[self._normalize(key)] = action
        return self

    def bind_all(self, table: Mapping[tuple[str, ...], Action]) -> Keymap:
        for keys, action in table.items():
            self.bind(action, *keys)
        return self

    def lookup(self, key: str) -> Action | None:
        return self._actions.get(self._normalize(key))

    def __contains__(self, key: str) -> bool:
        return self._normalize(key) in self._actions


DEFAULT_BINDINGS: dict[tuple[str, ...], Action] = {
    ("ESC", "CTRL_C"): actions.simple(ActionKind.CANCEL),
    ("HOME", "CTRL_A"): actions.simple(ActionKind.LINE_START),
    ("END", "CTRL_E"): actions.simple(ActionKind.LINE_END),
    ("LEFT", "CTRL_B"): actions.move_cursor(-1),
    ("RIGHT", "CTRL_F"): actions.move_cursor(+1),
    ("UP", "CTRL_P"): actions.simple(ActionKind.SELECT_PREV),
    ("DOWN", "CTRL_N"): actions.simple(ActionKind.SELECT_NEXT),
    ("PAGE_UP",): actions.simple(ActionKind.SELECT_PREV_PAGE),
    ("PAGE_DOWN",): actions.simple(ActionKind.SELECT_NEXT_PAGE),
    ("BACKSPACE",): actions.simple(ActionKind.DELETE_BACKWARD),
    ("DELETE", "CTRL_D"): actions.simple(ActionKind.DELETE_FORWARD),
    ("CTRL_W",): actions.simple(ActionKind.DELETE_WORD_BACKWARD),
    ("CTRL_U",): actions.simple(ActionKind.DELETE_TO_LINE_START),
    ("CTRL_K",): actions.simple(ActionKind.CLEAR_TO_END),
    ("TAB",): actions.simple(ActionKind.ACCEPT_COMPLETION),
    ("ENTER", "CTRL_J"): actions.submit(raw=False),
    ("SHIFT_ENTER", "ALT_ENTER"): actions.submit(raw=True),
}


def build_menu_keymap() -> Keymap:
    """Return a fresh keymap holding the default menu bindings."""
    return Keymap().bind_all(DEFAULT_BINDINGS)


_DEFAULT_KEYMAP = build_menu_keymap()


def action_for_key(key: str, keymap: Keymap | None = None) -> Action | None:
    """Translate one key token into an action; ``None`` means ignore the key."""
    if not key:
        return None
    if key.startswith(PASTE_PREFIX):
        return actions.paste_text(key[len(PASTE_PREFIX) :])
    if len(key) == 1:
        return actions.insert_text(key) if key.isprintable() else None
    return (keymap or _DEFAULT_KEYMAP).lookup(key)


__all__ = ["DEFAULT_BINDINGS", "Keymap", "SELECTION_PASTE_KEYS", "action_for_key", "build_menu_keymap"]
