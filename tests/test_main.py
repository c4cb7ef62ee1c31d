from __future__ import annotations

import contextlib
import io
import tempfile
import unittest
from pathlib import Path

from _testutil import ensure_repo_on_path

ensure_repo_on_path()

import config  # noqa: E402
import main  # noqa: E402
from core.settings import SettingsError  # noqa: E402


class TestCommandLine(unittest.TestCase):
    def test_defaults(self) -> None:
        args = main.build_parser().parse_args([])
        self.assertEqual(args.config, config.SETTINGS_PATH)
        self.assertEqual(args.dimensions, [])
        self.assertIsNone(args.seed)
        self.assertFalse(args.verbose)

    def test_dimension_override(self) -> None:
        args = main.build_parser().parse_args(["10", "10", "10", "10", "--seed", "3"])
        settings = main.resolve_settings(args)
        self.assertEqual(settings.dimensions, (10, 10, 10, 10))
        self.assertEqual(args.seed, 3)

    def test_settings_file_used_without_override(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "config.txt"
            path.write_text("dimensions: 4x3x2x1\nfood-count: 5\n", encoding="utf-8")
            args = main.build_parser().parse_args(["--config", str(path)])
            settings = main.resolve_settings(args)
        self.assertEqual(settings.dimensions, (4, 3, 2, 1))
        self.assertEqual(settings.food_count, 5)

    def test_wrong_number_of_sizes(self) -> None:
        args = main.build_parser().parse_args(["10", "10"])
        with self.assertRaises(SettingsError):
            main.resolve_settings(args)

    def test_bad_settings_exit_code(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "config.txt"
            path.write_text("fov: 400\n", encoding="utf-8")
            stderr = io.StringIO()
            with contextlib.redirect_stderr(stderr):
                code = main.main(["--config", str(path)])
        self.assertEqual(code, 2)
        self.assertIn("fov", stderr.getvalue())

    def test_undecodable_settings_exit_code(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "config.txt"
            path.write_bytes(b"\xff\xfe garbage")
            stderr = io.StringIO()
            with contextlib.redirect_stderr(stderr):
                code = main.main(["--config", str(path)])
        self.assertEqual(code, 2)
        self.assertIn("UTF-8", stderr.getvalue())

    def test_missing_settings_exit_code(self) -> None:
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            code = main.main(["--config", "/nonexistent/config.txt"])
        self.assertEqual(code, 2)
        self.assertIn("not found", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
