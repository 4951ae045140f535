"""Session state threaded through the navigation controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .matching import Candidate
from .pagination import EMPTY_WINDOW, Window
from .text_buffer import TextBuffer


class SessionState(Enum):
    EDITING = "editing"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Outcome:
    """Terminal result of a session; ``payload`` is only written when accepted."""

    status: SessionState
    payload: str = ""

    @property
    def accepted(self) -> bool:
        return self.status is SessionState.ACCEPTED


@dataclass
class Session:
    candidates: tuple[Candidate, ...]
    buffer: TextBuffer = field(default_factory=TextBuffer)
    matches: list[Candidate] = field(default_factory=list)
    window: Window = EMPTY_WINDOW
    state: SessionState = SessionState.EDITING
    outcome: Outcome | None = None

    @property
    def query(self) -> str:
        return self.buffer.text

    @property
    def selected(self) -> Candidate | None:
        position = self.window.selected
        if position is None or not (0 <= position < len(self.matches)):
            return None
        return self.matches[position]

    @property
    def visible(self) -> list[Candidate]:
        return list(self.window.visible(self.matches))

    @property
    def finished(self) -> bool:
        return self.state is not SessionState.EDITING
