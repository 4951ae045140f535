"""Navigation state machine over a menu ``Session``.

The controller owns the session exclusively. ``dispatch`` applies one
canonical action and returns an ``Outcome`` once the session reaches a
terminal state; the runtime loop decides what to do with it. Matching and
pagination are delegated to pure helpers so every transition is testable
without a terminal.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace

from ..log import get_logger
from .actions import Action, ActionKind
from .matching import Candidate, filter_matches
from .pagination import Capacity, RowCapacity, paginate, paginate_to_end
from .session import Outcome, Session, SessionState
from .text_buffer import TextBuffer

logger = get_logger("menu.controller")

ActionHandler = Callable[[Action], "Outcome | None"]


def first_line(text: str) -> str:
    """Cut pasted text at its first line break."""
    for separator in ("\r", "\n"):
        text = text.split(separator, 1)[0]
    return text


class NavigationController:
    """Apply canonical actions to a session and report terminal outcomes."""

    def __init__(
        self,
        candidates: Sequence[Candidate],
        capacity: Capacity,
        *,
        case_sensitive: bool = True,
        return_early: bool = False,
        message_mode: bool = False,
    ) -> None:
        self.capacity = capacity
        self.case_sensitive = case_sensitive
        self.return_early = return_early
        self.message_mode = message_mode
        self.session = Session(candidates=tuple(candidates), buffer=TextBuffer())
        self._handlers: dict[ActionKind, ActionHandler] = {
            ActionKind.INSERT_TEXT: self._insert_text,
            ActionKind.PASTE_TEXT: self._paste_text,
            ActionKind.MOVE_CURSOR: self._move_cursor,
            ActionKind.LINE_START: self._line_start,
            ActionKind.LINE_END: self._line_end,
            ActionKind.DELETE_BACKWARD: self._edit(TextBuffer.delete_backward),
            ActionKind.DELETE_FORWARD: self._edit(TextBuffer.delete_forward),
            ActionKind.DELETE_WORD_BACKWARD: self._edit(TextBuffer.delete_word_backward),
            ActionKind.DELETE_TO_LINE_START: self._edit(TextBuffer.delete_to_start),
            ActionKind.CLEAR_TO_END: self._edit(TextBuffer.truncate),
            ActionKind.SELECT_FIRST: self._select_first,
            ActionKind.SELECT_LAST: self._select_last,
            ActionKind.SELECT_PREV_PAGE: self._select_prev_page,
            ActionKind.SELECT_NEXT_PAGE: self._select_next_page,
            ActionKind.SELECT_PREV: self._select_prev,
            ActionKind.SELECT_NEXT: self._select_next,
            ActionKind.ACCEPT_COMPLETION: self._accept_completion,
            ActionKind.SUBMIT: self._submit,
            ActionKind.CANCEL: lambda _action: self.cancel(),
        }
        if message_mode:
            self.session.matches = list(self.session.candidates)
            self._repaginate(0)
        else:
            self._refilter(auto_accept=False)

    @property
    def row_mode(self) -> bool:
        return isinstance(self.capacity, RowCapacity)

    def dispatch(self, action: Action) -> Outcome | None:
        """Apply ``action``; return the outcome if the session is (now) finished."""
        if self.session.finished:
            return self.session.outcome
        if self.message_mode:
            return None
        handler = self._handlers.get(action.kind)
        if handler is None:
            return None
        return handler(action)

    def set_capacity(self, capacity: Capacity) -> None:
        """Re-paginate for a new capacity, keeping the selection visible."""
        self.capacity = capacity
        window = self.session.window
        self._repaginate(window.first, window.selected)
        selected = self.session.window.selected
        if selected is not None and not self.session.window.contains(selected, len(self.session.matches)):
            self._repaginate(selected)

    def cancel(self) -> Outcome:
        return self._finish(SessionState.CANCELLED, "")

    def dismiss(self) -> Outcome:
        """Timer hook for message mode: end the session without a selection."""
        return self._finish(SessionState.ACCEPTED, "")

    def _finish(self, state: SessionState, payload: str) -> Outcome:
        if self.session.outcome is not None:
            return self.session.outcome
        outcome = Outcome(state, payload)
        self.session.state = state
        self.session.outcome = outcome
        logger.debug("session finished: %s (%d chars)", state.value, len(payload))
        return outcome

    def _repaginate(self, pivot: int, selected: int | None = None) -> None:
        self.session.window = paginate(self.session.matches, pivot, self.capacity, selected)

    def _refilter(self, auto_accept: bool = True) -> Outcome | None:
        session = self.session
        previous = session.selected
        session.matches = filter_matches(session.candidates, session.query, self.case_sensitive)
        pivot = 0
        if previous is not None:
            pivot = next(
                (position for position, item in enumerate(session.matches) if item.index == previous.index),
                0,
            )
        self._repaginate(pivot)
        logger.debug("query %r matched %d of %d", session.query, len(session.matches), len(session.candidates))
        if auto_accept and self.return_early and len(session.matches) == 1:
            return self._finish(SessionState.ACCEPTED, session.matches[0].text)
        return None

    def _edit(self, operation: Callable[[TextBuffer], bool]) -> ActionHandler:
        def handler(_action: Action) -> Outcome | None:
            if not operation(self.session.buffer):
                return None
            return self._refilter()

        return handler

    def _insert_text(self, action: Action) -> Outcome | None:
        if not action.text or not self.session.buffer.insert(action.text):
            return None
        return self._refilter()

    def _paste_text(self, action: Action) -> Outcome | None:
        return self._insert_text(replace(action, kind=ActionKind.INSERT_TEXT, text=first_line(action.text)))

    def _move_cursor(self, action: Action) -> Outcome | None:
        buffer = self.session.buffer
        selected = self.session.window.selected
        if action.delta < 0:
            if buffer.cursor > 0 and (selected in (None, 0) or self.row_mode):
                buffer.move_cursor(action.delta)
                return None
            if self.row_mode:
                return None
            return self._select_prev(action)
        if action.delta > 0:
            if not buffer.at_end:
                buffer.move_cursor(action.delta)
                return None
            if self.row_mode:
                return None
            return self._select_next(action)
        return None

    def _line_start(self, action: Action) -> Outcome | None:
        if self.session.window.selected in (None, 0):
            self.session.buffer.move_to_start()
            return None
        return self._select_first(action)

    def _line_end(self, action: Action) -> Outcome | None:
        if not self.session.buffer.at_end:
            self.session.buffer.move_to_end()
            return None
        return self._select_last(action)

    def _select_first(self, _action: Action) -> Outcome | None:
        if self.session.matches:
            self._repaginate(0)
        return None

    def _select_last(self, _action: Action) -> Outcome | None:
        if self.session.matches:
            self.session.window = paginate_to_end(self.session.matches, self.capacity)
        return None

    def _select_prev_page(self, _action: Action) -> Outcome | None:
        if self.session.matches:
            self._repaginate(self.session.window.previous)
        return None

    def _select_next_page(self, _action: Action) -> Outcome | None:
        last = self.session.window.last
        if last is not None:
            self._repaginate(last)
        return None

    def _select_prev(self, _action: Action) -> Outcome | None:
        window = self.session.window
        if window.selected is None or window.selected == 0:
            return None
        target = window.selected - 1
        if target < window.first:
            self._repaginate(window.previous, target)
        else:
            self.session.window = replace(window, selected=target)
        return None

    def _select_next(self, _action: Action) -> Outcome | None:
        window = self.session.window
        if window.selected is None or window.selected >= len(self.session.matches) - 1:
            return None
        target = window.selected + 1
        if window.last is not None and target >= window.last:
            self._repaginate(target)
        else:
            self.session.window = replace(window, selected=target)
        return None

    def _accept_completion(self, _action: Action) -> Outcome | None:
        selected = self.session.selected
        if selected is None:
            return None
        self.session.buffer.set_text(selected.text)
        return self._refilter()

    def _submit(self, action: Action) -> Outcome | None:
        selected = self.session.selected
        if selected is not None and not action.raw:
            return self._finish(SessionState.ACCEPTED, selected.text)
        return self._finish(SessionState.ACCEPTED, self.session.query)


__all__ = ["NavigationController", "first_line"]
