"""UI theme definitions and colour resolution.

A theme is a pair of colour schemes: one for ordinary rows and the input
field, one for the selected item and the prompt. Colour strings accept
``#RGB``, ``#RRGGBB``, ANSI colour names and 256-colour indexes; they are
turned into SGR sequences with Pygments' terminal escape helper.
"""

from __future__ import annotations

from dataclasses import dataclass

from pygments.formatters.terminal256 import EscapeSequence
from pygments.style import ansicolors

RESET = "\033[0m"
_HEX_DIGITS = frozenset("0123456789abcdef")
Color = tuple[int, int, int] | int | str

# Pygments maps "white" onto the bold attribute, so bright white goes through the 256 palette.
_COLOR_ALIASES: dict[str, Color] = {
    "white": 15,
    "brightwhite": 15,
    "grey": "ansigray",
    "lightgray": "ansigray",
}


def parse_color(value: str) -> Color:
    """Parse a user colour string; raise ``ValueError`` for unknown colours."""
    text = str(value).strip().lower()
    if text.startswith("#"):
        digits = text[1:]
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        if len(digits) == 6 and all(ch in _HEX_DIGITS for ch in digits):
            return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
        raise ValueError(f"cannot allocate color '{value}'")
    if text.isdigit():
        index = int(text)
        if 0 <= index <= 255:
            return index
        raise ValueError(f"cannot allocate color '{value}'")
    name = text[4:] if text.startswith("ansi") else text
    if name in _COLOR_ALIASES:
        return _COLOR_ALIASES[name]
    if f"ansi{name}" in ansicolors:
        return f"ansi{name}"
    raise ValueError(f"cannot allocate color '{value}'")


def _escape(*, fg: Color | None = None, bg: Color | None = None) -> str:
    sequence = EscapeSequence(fg=fg, bg=bg)
    if isinstance(fg, tuple) or isinstance(bg, tuple):
        return sequence.true_color_string()
    return sequence.color_string()


def color_sgr(fg: Color | None, bg: Color | None) -> str:
    """SGR prefix selecting ``fg`` on ``bg``; either may be ``None`` to keep the default."""
    parts = []
    if fg is not None:
        parts.append(_escape(fg=fg))
    if bg is not None:
        parts.append(_escape(bg=bg))
    return "".join(parts)


@dataclass(frozen=True)
class ColorScheme:
    fg: Color | None
    bg: Color | None

    @property
    def sgr(self) -> str:
        return color_sgr(self.fg, self.bg)

    def with_overrides(self, fg: Color | None = None, bg: Color | None = None) -> ColorScheme:
        return ColorScheme(fg=self.fg if fg is None else fg, bg=self.bg if bg is None else bg)


@dataclass(frozen=True)
class UITheme:
    """Semantic palette used by the renderer; empty strings disable styling."""

    name: str
    normal: str
    selected: str
    reset: str


@dataclass(frozen=True)
class ThemePalette:
    name: str
    normal: ColorScheme
    selected: ColorScheme

    def build(self) -> UITheme:
        return UITheme(name=self.name, normal=self.normal.sgr, selected=self.selected.sgr, reset=RESET)


DEFAULT_PALETTE = ThemePalette(
    name="default",
    normal=ColorScheme(fg=(0xBB, 0xBB, 0xBB), bg=(0x22, 0x22, 0x22)),
    selected=ColorScheme(fg=(0xEE, 0xEE, 0xEE), bg=(0x00, 0x55, 0x77)),
)

OCEAN_PALETTE = ThemePalette(
    name="ocean",
    normal=ColorScheme(fg=153, bg=17),
    selected=ColorScheme(fg=16, bg=45),
)

TERMINAL_PALETTE = ThemePalette(
    name="terminal",
    normal=ColorScheme(fg=None, bg=None),
    selected=ColorScheme(fg="ansiblack", bg="ansicyan"),
)

PLAIN_THEME = UITheme(name="plain", normal="", selected="\033[7m", reset=RESET)

_PALETTES: dict[str, ThemePalette] = {
    DEFAULT_PALETTE.name: DEFAULT_PALETTE,
    OCEAN_PALETTE.name: OCEAN_PALETTE,
    TERMINAL_PALETTE.name: TERMINAL_PALETTE,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_PALETTES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_PALETTE.name
    candidate = str(name).strip().lower()
    if candidate in _PALETTES:
        return candidate
    return DEFAULT_PALETTE.name


@dataclass(frozen=True)
class ColorOverrides:
    normal_fg: Color | None = None
    normal_bg: Color | None = None
    selected_fg: Color | None = None
    selected_bg: Color | None = None


def resolve_theme(
    name: str | None,
    *,
    no_color: bool = False,
    overrides: ColorOverrides | None = None,
) -> UITheme:
    """Return the concrete theme for ``name`` with per-colour overrides applied.

    ``no_color`` yields the plain theme, which marks the selection with reverse
    video only.
    """
    if no_color:
        return PLAIN_THEME
    palette = _PALETTES[normalize_theme_name(name)]
    if overrides is not None:
        palette = ThemePalette(
            name=palette.name,
            normal=palette.normal.with_overrides(overrides.normal_fg, overrides.normal_bg),
            selected=palette.selected.with_overrides(overrides.selected_fg, overrides.selected_bg),
        )
    return palette.build()


__all__ = [
    "Color",
    "ColorOverrides",
    "ColorScheme",
    "DEFAULT_PALETTE",
    "PLAIN_THEME",
    "RESET",
    "UITheme",
    "available_theme_names",
    "color_sgr",
    "normalize_theme_name",
    "parse_color",
    "resolve_theme",
]
