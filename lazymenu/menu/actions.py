"""Canonical menu actions produced by the keymap and consumed by the controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ActionKind(Enum):
    INSERT_TEXT = "insert_text"
    PASTE_TEXT = "paste_text"
    MOVE_CURSOR = "move_cursor"
    LINE_START = "line_start"
    LINE_END = "line_end"
    DELETE_BACKWARD = "delete_backward"
    DELETE_FORWARD = "delete_forward"
    DELETE_WORD_BACKWARD = "delete_word_backward"
    DELETE_TO_LINE_START = "delete_to_line_start"
    CLEAR_TO_END = "clear_to_end"
    SELECT_FIRST = "select_first"
    SELECT_LAST = "select_last"
    SELECT_PREV_PAGE = "select_prev_page"
    SELECT_NEXT_PAGE = "select_next_page"
    SELECT_PREV = "select_prev"
    SELECT_NEXT = "select_next"
    ACCEPT_COMPLETION = "accept_completion"
    SUBMIT = "submit"
    CANCEL = "cancel"


@dataclass(frozen=True)
class Action:
    """One canonical action.

    ``text`` carries inserted/pasted text, ``delta`` the rune offset for cursor
    moves, and ``raw`` asks ``SUBMIT`` to return the typed text verbatim.
    """

    kind: ActionKind
    text: str = ""
    delta: int = 0
    raw: bool = False


def insert_text(text: str) -> Action:
    return Action(ActionKind.INSERT_TEXT, text=text)


def paste_text(text: str) -> Action:
    return Action(ActionKind.PASTE_TEXT, text=text)


def move_cursor(delta: int) -> Action:
    return Action(ActionKind.MOVE_CURSOR, delta=delta)


def submit(raw: bool = False) -> Action:
    return Action(ActionKind.SUBMIT, raw=raw)


def simple(kind: ActionKind) -> Action:
    return Action(kind)
