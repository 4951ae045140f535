"""Menu core: query buffer, tiered matching, pagination, and navigation.

Everything here is terminal-agnostic. The runtime package feeds actions in
and renders ``Session`` snapshots out.
"""

from .actions import Action, ActionKind
from .controller import NavigationController
from .matching import Candidate, MatchTier, build_candidates, classify, filter_matches
from .pagination import (
    Capacity,
    RowCapacity,
    WidthCapacity,
    Window,
    paginate,
    paginate_to_end,
    reserve_width_budget,
)
from .session import Outcome, Session, SessionState
from .text_buffer import BUFFER_SIZE, TextBuffer

__all__ = [
    "Action",
    "ActionKind",
    "BUFFER_SIZE",
    "Candidate",
    "Capacity",
    "MatchTier",
    "NavigationController",
    "Outcome",
    "RowCapacity",
    "Session",
    "SessionState",
    "TextBuffer",
    "WidthCapacity",
    "Window",
    "build_candidates",
    "classify",
    "filter_matches",
    "paginate",
    "paginate_to_end",
    "reserve_width_budget",
]
