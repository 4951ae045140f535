"""Tests for terminal cell-width measurement and clipping."""

from __future__ import annotations

import unittest

from lazymenu.ansi import clip_text, display_width, fit_text, printable_text, strip_ansi


class DisplayWidthTests(unittest.TestCase):
    def test_wide_combining_and_tab_widths(self) -> None:
        self.assertEqual(display_width("日本"), 4)
        self.assertEqual(display_width("é"), 1)
        self.assertEqual(display_width("a\tb"), 9)
        self.assertEqual(display_width(""), 0)

    def test_control_characters_are_made_printable(self) -> None:
        self.assertEqual(printable_text("a\x1bb\tc"), "a?b\tc")
        self.assertEqual(display_width("a\x07"), 2)


class ClipTextTests(unittest.TestCase):
    def test_clip_never_splits_wide_character(self) -> None:
        self.assertEqual(clip_text("日本語", 5), "日本")
        self.assertEqual(clip_text("abc", 0), "")

    def test_clip_expands_tabs(self) -> None:
        self.assertEqual(clip_text("a\tb", 9), "a" + " " * 7 + "b")
        self.assertEqual(clip_text("a\tb", 4), "a")

    def test_fit_pads_or_clips_to_exact_width(self) -> None:
        self.assertEqual(fit_text("ab", 4), "ab  ")
        self.assertEqual(fit_text("abcdef", 3), "abc")
        self.assertEqual(fit_text("日本", 3), "日 ")

    def test_strip_ansi(self) -> None:
        self.assertEqual(strip_ansi("\x1b[38;5;12mhi\x1b[0m"), "hi")


if __name__ == "__main__":
    unittest.main()
