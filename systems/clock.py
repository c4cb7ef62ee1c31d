"""
systems/clock.py
================
Run clock driven by the ``display-clock`` setting.

Modes
-----
NONE        Time is tracked (for the log) but never shown.
STOPWATCH   Counts up from zero.
COUNTDOWN   Counts down from the configured seconds; the run is lost when
            it reaches zero.
"""

from __future__ import annotations

import math
from typing import Optional

from core.settings import ClockMode, ClockSpec


class GameClock:
    """Elapsed/remaining time for one run."""

    def __init__(self, spec: ClockSpec) -> None:
        self.spec     = spec
        self.elapsed  = 0.0
        self._running = True

    def tick(self, dt: float) -> None:
        if self._running:
            self.elapsed += dt

    def stop(self) -> None:
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def remaining(self) -> Optional[float]:
        """Seconds left on a countdown, ``None`` for other modes."""
        if self.spec.mode is not ClockMode.COUNTDOWN:
            return None
        return max(0.0, self.spec.seconds - self.elapsed)

    @property
    def expired(self) -> bool:
        return self.remaining == 0.0

    def display_text(self) -> Optional[str]:
        """``MM:SS`` for the HUD, or ``None`` when the clock is hidden.

        Countdowns round up so the display reads ``00:00`` only once the
        time has actually run out.
        """
        if self.spec.mode is ClockMode.NONE:
            return None
        if self.spec.mode is ClockMode.COUNTDOWN:
            seconds = math.ceil(self.remaining)
        else:
            seconds = math.floor(self.elapsed)
        minutes, seconds = divmod(int(seconds), 60)
        return f"{minutes:02d}:{seconds:02d}"

    def __repr__(self) -> str:
        return f"<GameClock {self.spec.mode.name} elapsed={self.elapsed:.1f}>"
