"""Command-line front door for lazymenu.

Reads newline-separated candidates from stdin, runs the menu on the
controlling terminal and writes the chosen line to stdout. Exit status is 0
when something was accepted (or a message was dismissed) and 1 otherwise.
"""

from __future__ import annotations

import argparse
import sys

from . import __version__
from .candidates import read_candidates
from .errors import LazymenuError
from .log import get_logger
from .render import ALIGN_CENTRE, ALIGN_LEFT, ALIGN_RIGHT
from .runtime import run_menu
from .runtime.app import DEFAULT_MESSAGE_TIMEOUT_SECONDS, MenuOptions
from .runtime.config import MenuDefaults, load_menu_defaults
from .ui_theme import ColorOverrides, available_theme_names, parse_color, resolve_theme

logger = get_logger("cli")


def _nonnegative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _nonnegative_seconds(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number of seconds: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _color(value: str) -> str:
    """argparse type that validates a colour string but keeps it unparsed."""
    try:
        parse_color(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return value


def build_parser(defaults: MenuDefaults | None = None) -> argparse.ArgumentParser:
    """Build the argument parser; ``defaults`` come from the config file."""
    defaults = defaults or MenuDefaults()
    parser = argparse.ArgumentParser(
        prog="lazymenu",
        description="Display newline-separated input from stdin as a menu and print the chosen line.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("--help", action="help", help="Show this help message and exit.")
    parser.add_argument("-v", "--version", action="store_true", help="Display version information.")
    parser.add_argument(
        "-b",
        "--bottom",
        action="store_true",
        default=defaults.bottom,
        help="Show the menu at the bottom of the screen.",
    )
    parser.add_argument(
        "-e",
        "--echo",
        dest="message_alignment",
        action="store_const",
        const=ALIGN_LEFT,
        help="Display text from stdin with no user interaction.",
    )
    parser.add_argument(
        "-ec",
        "--echo-centre",
        dest="message_alignment",
        action="store_const",
        const=ALIGN_CENTRE,
        help="Same as --echo but align text centrally.",
    )
    parser.add_argument(
        "-er",
        "--echo-right",
        dest="message_alignment",
        action="store_const",
        const=ALIGN_RIGHT,
        help="Same as --echo but align text right.",
    )
    parser.add_argument(
        "-et",
        "--echo-timeout",
        type=_nonnegative_seconds,
        default=DEFAULT_MESSAGE_TIMEOUT_SECONDS,
        metavar="SECS",
        help="Close the message after SECS seconds.",
    )
    parser.add_argument(
        "-h",
        "--height",
        type=_nonnegative_int,
        default=0,
        metavar="N",
        help="Make the menu at least N rows high.",
    )
    parser.add_argument(
        "-i",
        "--insensitive",
        action="store_true",
        default=defaults.case_insensitive,
        help="Match menu items case insensitively.",
    )
    parser.add_argument(
        "-l",
        "--lines",
        type=_nonnegative_int,
        default=defaults.lines,
        metavar="LINES",
        help="List items vertically within the given number of lines.",
    )
    parser.add_argument(
        "-m",
        "--monitor",
        type=int,
        default=-1,
        metavar="MONITOR",
        help="Accepted for compatibility; the terminal decides placement.",
    )
    parser.add_argument("-p", "--prompt", default=defaults.prompt, metavar="PROMPT", help="Prompt left of the input.")
    parser.add_argument(
        "-po",
        "--prompt-only",
        default=None,
        metavar="PROMPT",
        help="Same as --prompt but do not read stdin.",
    )
    parser.add_argument(
        "-r",
        "--return-early",
        action="store_true",
        default=defaults.return_early,
        help="Return as soon as a single match is found.",
    )
    parser.add_argument("-fn", "--font-name", default=None, metavar="FONT", help="Accepted for compatibility; ignored.")
    parser.add_argument(
        "-nb",
        "--normal-background",
        type=_color,
        default=defaults.normal_background,
        metavar="COLOR",
        help="Normal background colour (#RGB, #RRGGBB, names, 0-255).",
    )
    parser.add_argument(
        "-nf",
        "--normal-foreground",
        type=_color,
        default=defaults.normal_foreground,
        metavar="COLOR",
        help="Normal foreground colour.",
    )
    parser.add_argument(
        "-sb",
        "--selected-background",
        type=_color,
        default=defaults.selected_background,
        metavar="COLOR",
        help="Selected background colour.",
    )
    parser.add_argument(
        "-sf",
        "--selected-foreground",
        type=_color,
        default=defaults.selected_foreground,
        metavar="COLOR",
        help="Selected foreground colour.",
    )
    parser.add_argument(
        "--theme",
        default=defaults.theme,
        help=f"Base colour theme ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colour output.")
    return parser


def _optional_color(value: str | None):
    return None if value is None else parse_color(value)


def options_from_args(args: argparse.Namespace) -> MenuOptions:
    """Translate parsed arguments into runtime options.

    Raises ``ValueError`` when a colour coming from the config file is invalid.
    """
    overrides = ColorOverrides(
        normal_fg=_optional_color(args.normal_foreground),
        normal_bg=_optional_color(args.normal_background),
        selected_fg=_optional_color(args.selected_foreground),
        selected_bg=_optional_color(args.selected_background),
    )
    prompt = args.prompt_only if args.prompt_only is not None else args.prompt
    return MenuOptions(
        bottom=args.bottom,
        case_insensitive=args.insensitive,
        return_early=args.return_early,
        lines=args.lines,
        min_height=args.height,
        prompt=prompt,
        message_alignment=args.message_alignment,
        message_timeout=args.echo_timeout,
        theme=resolve_theme(args.theme, no_color=args.no_color, overrides=overrides),
    )


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, run the menu, and report the outcome.

    Prints the accepted payload without a trailing newline. Raises
    ``SystemExit(1)`` on cancel or fatal errors.
    """
    parser = build_parser(load_menu_defaults())
    args = parser.parse_args(argv)

    if args.version:
        sys.stdout.write(f"lazymenu-{__version__}\n")
        return
    if args.monitor >= 0 or args.font_name:
        logger.debug("ignoring --monitor/--font-name in terminal mode")

    try:
        options = options_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        candidates = () if args.prompt_only is not None else read_candidates(sys.stdin.buffer)
        outcome = run_menu(candidates, options)
    except LazymenuError as exc:
        sys.stderr.write(f"lazymenu: {exc}\n")
        raise SystemExit(1) from exc

    if not outcome.accepted:
        raise SystemExit(1)
    sys.stdout.write(outcome.payload)
    sys.stdout.flush()


if __name__ == "__main__":
    main()
