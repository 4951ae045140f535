"""Tests for config defaults loading and input sanitization.

Ensures malformed or mistyped config data falls back to built-in defaults.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazymenu.runtime import config


class ConfigBehaviorTests(unittest.TestCase):
    def _write(self, tmp: str, payload: str) -> Path:
        config_path = Path(tmp) / "config.json"
        config_path.write_text(payload, encoding="utf-8")
        return config_path

    def test_missing_file_yields_builtin_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazymenu.runtime.config.CONFIG_PATH", Path(tmp) / "absent.json"):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_menu_defaults(), config.MenuDefaults())

    def test_values_are_loaded(self) -> None:
        payload = {
            "theme": "ocean",
            "lines": 12,
            "bottom": True,
            "case_insensitive": True,
            "return_early": True,
            "prompt": "run:",
            "selected_background": "#285577",
        }
        with tempfile.TemporaryDirectory() as tmp:
            config_path = self._write(tmp, json.dumps(payload))
            with mock.patch("lazymenu.runtime.config.CONFIG_PATH", config_path):
                defaults = config.load_menu_defaults()

        self.assertEqual(defaults.theme, "ocean")
        self.assertEqual(defaults.lines, 12)
        self.assertTrue(defaults.bottom)
        self.assertTrue(defaults.case_insensitive)
        self.assertTrue(defaults.return_early)
        self.assertEqual(defaults.prompt, "run:")
        self.assertEqual(defaults.selected_background, "#285577")
        self.assertIsNone(defaults.normal_background)

    def test_wrong_types_are_ignored(self) -> None:
        payload = {"lines": "ten", "bottom": "yes", "prompt": 5, "theme": "   "}
        with tempfile.TemporaryDirectory() as tmp:
            config_path = self._write(tmp, json.dumps(payload))
            with mock.patch("lazymenu.runtime.config.CONFIG_PATH", config_path):
                defaults = config.load_menu_defaults()

        self.assertEqual(defaults, config.MenuDefaults())

    def test_negative_lines_clamp_to_zero(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = self._write(tmp, json.dumps({"lines": -3}))
            with mock.patch("lazymenu.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_menu_defaults().lines, 0)

    def test_malformed_json_falls_back_to_empty_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = self._write(tmp, "{not json")
            with mock.patch("lazymenu.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_non_object_json_falls_back_to_empty_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = self._write(tmp, "[1, 2]")
            with mock.patch("lazymenu.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})


if __name__ == "__main__":
    unittest.main()
