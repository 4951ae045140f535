"""Menu rendering into styled terminal rows.

Rendering is presentation-only: it reads a ``Session`` snapshot and returns
the rows to paint plus where the caret belongs. The same width rules feed the
paginator (see :func:`width_capacity`) so what is paginated is what is drawn.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .ansi import display_width, fit_text
from .menu.matching import Candidate
from .menu.pagination import RowCapacity, WidthCapacity, Window, reserve_width_budget
from .menu.session import Session
from .ui_theme import UITheme

LEFT_INDICATOR = "<"
RIGHT_INDICATOR = ">"
ALIGN_LEFT = "left"
ALIGN_CENTRE = "centre"
ALIGN_RIGHT = "right"
MESSAGE_ALIGNMENTS = (ALIGN_LEFT, ALIGN_CENTRE, ALIGN_RIGHT)


def text_width(text: str) -> int:
    """Cell width of ``text`` drawn with one column of padding on each side."""
    return display_width(text) + 2


def input_field_width(candidates: Sequence[Candidate], columns: int) -> int:
    """Input field width: the widest candidate, capped at a third of the screen."""
    widest = max((text_width(candidate.text) for candidate in candidates), default=0)
    return min(widest, columns // 3)


def prompt_width(prompt: str | None) -> int:
    return text_width(prompt) if prompt else 0


@dataclass(frozen=True)
class MenuLayout:
    """Static geometry and presentation options for one menu session."""

    columns: int
    lines: int = 0
    prompt: str | None = None
    input_width: int = 0
    min_height: int = 0
    message_alignment: str | None = None

    @property
    def vertical(self) -> bool:
        return self.lines > 0 and self.message_alignment is None

    @property
    def prompt_width(self) -> int:
        return prompt_width(self.prompt)


@dataclass(frozen=True)
class RenderedMenu:
    rows: list[str]
    cursor_row: int | None = None
    cursor_col: int | None = None


def width_capacity(layout: MenuLayout) -> WidthCapacity:
    """Column budget for the horizontal bar after prompt, input and indicators."""
    if layout.message_alignment is not None:
        return WidthCapacity(budget=max(1, layout.columns), measure=text_width)
    budget = reserve_width_budget(
        layout.columns,
        layout.prompt_width,
        layout.input_width,
        text_width(LEFT_INDICATOR),
        text_width(RIGHT_INDICATOR),
    )
    return WidthCapacity(budget=budget, measure=text_width)


def capacity_for(layout: MenuLayout) -> RowCapacity | WidthCapacity:
    if layout.vertical:
        return RowCapacity(layout.lines)
    return width_capacity(layout)


def content_rows(layout: MenuLayout, candidate_count: int) -> int:
    """Prompt row plus one row per listed item in vertical mode."""
    if layout.vertical:
        return 1 + min(layout.lines, candidate_count)
    return 1


def menu_height(layout: MenuLayout, candidate_count: int) -> int:
    """Rows the menu occupies, at least ``min_height``."""
    return max(layout.min_height, content_rows(layout, candidate_count))


def _cell(text: str, width: int, style: str, theme: UITheme) -> str:
    if width <= 0:
        return ""
    return f"{style}{fit_text(' ' + text, width)}{theme.reset}"


def _render_message(session: Session, layout: MenuLayout, theme: UITheme) -> str:
    visible = session.visible
    used = sum(text_width(item.text) for item in visible)
    x = 0
    if layout.message_alignment in (ALIGN_RIGHT, ALIGN_CENTRE):
        x = max(0, layout.columns - used)
    if layout.message_alignment == ALIGN_CENTRE:
        x //= 2
    parts = [_cell("", x, theme.normal, theme)]
    for item in visible:
        width = min(text_width(item.text), layout.columns - x)
        parts.append(_cell(item.text, width, theme.normal, theme))
        x += width
    parts.append(_cell("", layout.columns - x, theme.normal, theme))
    return "".join(parts)


def _render_items_horizontal(
    session: Session,
    window: Window,
    x: int,
    layout: MenuLayout,
    theme: UITheme,
) -> tuple[list[str], int]:
    parts: list[str] = []
    right_width = text_width(RIGHT_INDICATOR)
    if window.has_more_before:
        left_width = text_width(LEFT_INDICATOR)
        parts.append(_cell(LEFT_INDICATOR, left_width, theme.normal, theme))
        x += left_width
    for position in range(window.first, window.end(len(session.matches))):
        item = session.matches[position]
        width = max(0, min(text_width(item.text), layout.columns - x - right_width))
        style = theme.selected if position == window.selected else theme.normal
        parts.append(_cell(item.text, width, style, theme))
        x += width
    tail = max(0, layout.columns - x - right_width)
    parts.append(_cell("", tail, theme.normal, theme))
    marker = RIGHT_INDICATOR if window.has_more_after else ""
    parts.append(_cell(marker, right_width, theme.normal, theme))
    return parts, x


def render_menu(session: Session, layout: MenuLayout, theme: UITheme, candidate_count: int | None = None) -> RenderedMenu:
    """Render ``session`` into terminal rows according to ``layout``."""
    if candidate_count is None:
        candidate_count = len(session.candidates)
    used_rows = content_rows(layout, candidate_count)
    height = max(layout.min_height, used_rows)
    offset = (height - used_rows) // 2
    blank = _cell("", layout.columns, theme.normal, theme)

    if layout.message_alignment is not None:
        rows = [blank] * height
        rows[offset] = _render_message(session, layout, theme)
        return RenderedMenu(rows=rows)

    x = 0
    parts: list[str] = []
    if layout.prompt:
        x = min(layout.prompt_width, layout.columns)
        parts.append(_cell(layout.prompt, x, theme.selected, theme))
    input_x = x
    if layout.vertical or not session.matches:
        field_width = layout.columns - x
    else:
        field_width = min(layout.input_width, layout.columns - x)
    parts.append(_cell(session.query, field_width, theme.normal, theme))
    x += field_width

    cursor_col: int | None = input_x + 1 + display_width(session.buffer.cursor_text)
    if cursor_col >= input_x + field_width:
        cursor_col = None

    list_rows: list[str] = []
    if layout.vertical:
        indent = _cell("", input_x, theme.normal, theme)
        for position, item in enumerate(session.visible, start=session.window.first):
            style = theme.selected if position == session.window.selected else theme.normal
            list_rows.append(indent + _cell(item.text, layout.columns - input_x, style, theme))
        list_rows = list_rows[: used_rows - 1]
    elif session.matches:
        item_parts, x = _render_items_horizontal(session, session.window, x, layout, theme)
        parts.extend(item_parts)
    else:
        parts.append(_cell("", layout.columns - x, theme.normal, theme))

    rows = [blank] * height
    rows[offset] = "".join(parts)
    for index, row in enumerate(list_rows, start=offset + 1):
        rows[index] = row
    return RenderedMenu(rows=rows, cursor_row=offset, cursor_col=cursor_col)


__all__ = [
    "ALIGN_CENTRE",
    "ALIGN_LEFT",
    "ALIGN_RIGHT",
    "MESSAGE_ALIGNMENTS",
    "MenuLayout",
    "RenderedMenu",
    "capacity_for",
    "input_field_width",
    "menu_height",
    "render_menu",
    "text_width",
    "width_capacity",
]
