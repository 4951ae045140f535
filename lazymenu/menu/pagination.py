"""Visible-window computation over a ranked match list.

A window is anchored at a pivot position and grows forward until the capacity
budget is spent. The start of the preceding page is found with an independent
backward scan so page-up can jump straight to it.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .matching import Candidate


@dataclass(frozen=True)
class RowCapacity:
    """Vertical list mode: every item occupies one row."""

    rows: int

    @property
    def budget(self) -> int:
        return self.rows

    def cost(self, text: str) -> int:
        return 1


@dataclass(frozen=True)
class WidthCapacity:
    """Horizontal bar mode: items consume their rendered width from a column budget."""

    budget: int
    measure: Callable[[str], int]

    def cost(self, text: str) -> int:
        return min(self.measure(text), self.budget)


Capacity = RowCapacity | WidthCapacity


def reserve_width_budget(
    columns: int,
    prompt_width: int,
    input_width: int,
    left_indicator_width: int,
    right_indicator_width: int,
) -> int:
    """Columns left for items after the prompt, input field and ``<``/``>`` markers."""
    return max(1, columns - (prompt_width + input_width + left_indicator_width + right_indicator_width))


@dataclass(frozen=True)
class Window:
    """Visible slice ``[first, last)`` of a match list plus the selected position.

    ``last`` is ``None`` when the view ends inside the budget. ``previous`` is
    where the page before ``first`` starts (``first`` itself on the first page).
    """

    first: int = 0
    last: int | None = None
    previous: int = 0
    selected: int | None = None

    def end(self, view_length: int) -> int:
        return view_length if self.last is None else self.last

    def visible(self, view: Sequence[Candidate]) -> Sequence[Candidate]:
        return view[self.first : self.end(len(view))]

    def contains(self, position: int, view_length: int) -> bool:
        return self.first <= position < self.end(view_length)

    @property
    def has_more_before(self) -> bool:
        return self.first > 0

    @property
    def has_more_after(self) -> bool:
        return self.last is not None


EMPTY_WINDOW = Window()


def _scan_forward(view: Sequence[Candidate], start: int, capacity: Capacity) -> int | None:
    total = 0
    position = start
    while position < len(view):
        total += capacity.cost(view[position].text)
        if total > capacity.budget:
            return position
        position += 1
    return None


def _scan_backward(view: Sequence[Candidate], end: int, capacity: Capacity) -> int:
    """Return the earliest start whose run ``[start, end)`` fits the budget."""
    total = 0
    position = end
    while position > 0:
        total += capacity.cost(view[position - 1].text)
        if total > capacity.budget:
            break
        position -= 1
    return position


def paginate(
    view: Sequence[Candidate],
    pivot: int,
    capacity: Capacity,
    selected: int | None = None,
) -> Window:
    """Anchor a window at ``pivot``; ``selected`` defaults to the pivot itself."""
    if not view:
        return EMPTY_WINDOW
    pivot = max(0, min(pivot, len(view) - 1))
    if selected is None:
        selected = pivot
    return Window(
        first=pivot,
        last=_scan_forward(view, pivot, capacity),
        previous=_scan_backward(view, pivot, capacity),
        selected=selected,
    )


def paginate_to_end(view: Sequence[Candidate], capacity: Capacity) -> Window:
    """Window that ends with the final item, filled backward, selecting it."""
    if not view:
        return EMPTY_WINDOW
    first = _scan_backward(view, len(view), capacity)
    if first == len(view):
        # Zero budget: keep the final item addressable.
        first = len(view) - 1
    return paginate(view, first, capacity, selected=len(view) - 1)


__all__ = [
    "Capacity",
    "EMPTY_WINDOW",
    "RowCapacity",
    "Window",
    "WidthCapacity",
    "paginate",
    "paginate_to_end",
    "reserve_width_budget",
]
