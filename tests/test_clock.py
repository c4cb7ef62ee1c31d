from __future__ import annotations

import unittest

from _testutil import ensure_repo_on_path

ensure_repo_on_path()

from core.settings import ClockMode, ClockSpec  # noqa: E402
from systems.clock import GameClock  # noqa: E402


class TestGameClock(unittest.TestCase):
    def test_stopwatch_counts_up(self) -> None:
        clock = GameClock(ClockSpec(mode=ClockMode.STOPWATCH))
        self.assertEqual(clock.display_text(), "00:00")
        clock.tick(65.9)
        self.assertEqual(clock.display_text(), "01:05")
        self.assertIsNone(clock.remaining)
        self.assertFalse(clock.expired)

    def test_countdown_rounds_up_until_expired(self) -> None:
        clock = GameClock(ClockSpec(mode=ClockMode.COUNTDOWN, seconds=90.0))
        self.assertEqual(clock.display_text(), "01:30")
        clock.tick(0.5)
        self.assertEqual(clock.display_text(), "01:30")
        clock.tick(89.0)
        self.assertEqual(clock.display_text(), "00:01")
        self.assertFalse(clock.expired)
        clock.tick(2.0)
        self.assertEqual(clock.remaining, 0.0)
        self.assertTrue(clock.expired)
        self.assertEqual(clock.display_text(), "00:00")

    def test_hidden_clock_still_tracks_time(self) -> None:
        clock = GameClock(ClockSpec(mode=ClockMode.NONE))
        clock.tick(3.0)
        self.assertIsNone(clock.display_text())
        self.assertEqual(clock.elapsed, 3.0)

    def test_stop(self) -> None:
        clock = GameClock(ClockSpec(mode=ClockMode.STOPWATCH))
        clock.tick(1.0)
        clock.stop()
        clock.tick(5.0)
        self.assertFalse(clock.running)
        self.assertEqual(clock.elapsed, 1.0)


if __name__ == "__main__":
    unittest.main()
