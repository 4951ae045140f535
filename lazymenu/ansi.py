"""Terminal cell-width measurement and clipping for menu text.

Widths follow terminal conventions: tabs expand to the next 8-column stop,
combining marks take no columns and East Asian wide characters take two.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def printable_text(text: str) -> str:
    """Replace control characters (other than tab) so they cannot move the cursor."""
    if text.isprintable():
        return text
    return "".join(ch if ch == "\t" or ch.isprintable() else "?" for ch in text)


def display_width(text: str) -> int:
    """Columns ``text`` occupies when drawn starting at column 0."""
    col = 0
    for ch in printable_text(text):
        col += char_display_width(ch, col)
    return col


def clip_text(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` columns, expanding tabs to spaces."""
    if max_cols <= 0 or not text:
        return ""
    out: list[str] = []
    col = 0
    for ch in printable_text(text):
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
    return "".join(out)


def fit_text(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and right-pad it with spaces to exactly that width."""
    clipped = clip_text(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)
