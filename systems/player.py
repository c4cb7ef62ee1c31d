"""
systems/player.py
=================
Player state: the cell the player occupies and the animated position used
for drawing.

The player commits to a destination cell immediately when a move is
accepted (``cell``); the drawn position (``position``) slides toward it over
``PLAYER_MOVE_TIME`` seconds.  Game rules always use ``cell``.
"""

from __future__ import annotations

import logging

import numpy as np

import config
from world.maze import Cell, Delta

log = logging.getLogger(__name__)


class Player:
    """The player avatar.

    Parameters
    ----------
    start:
        The cell the player spawns in.
    """

    def __init__(self, start: Cell) -> None:
        self.cell:     Cell       = tuple(start)
        self.position: np.ndarray = np.array(start, dtype=float)
        self.score:    int        = 0
        self.moves:    int        = 0
        self._speed:   float      = 0.0   # cells per second

    def move(self, delta: Delta, seconds: float = config.PLAYER_MOVE_TIME) -> Cell:
        """Commit to the cell one step along *delta* and start sliding to it.

        The caller is responsible for checking the maze first.

        Returns
        -------
        Cell
            The new destination cell.
        """
        if seconds <= 0:
            raise ValueError(f"Move time must be positive, got {seconds}")
        self.cell = tuple(c + d for c, d in zip(self.cell, delta))
        distance = float(np.linalg.norm(np.asarray(self.cell, dtype=float) - self.position))
        self._speed = distance / seconds
        self.moves += 1
        log.debug("Player moving to %r", self.cell)
        return self.cell

    def update(self, dt: float) -> None:
        """Advance the slide toward ``cell`` by *dt* seconds without overshooting."""
        target = np.asarray(self.cell, dtype=float)
        offset = target - self.position
        distance = float(np.linalg.norm(offset))
        if distance == 0.0:
            return
        travel = self._speed * dt
        if travel >= distance or self._speed == 0.0:
            self.position = target
        else:
            self.position = self.position + offset * (travel / distance)

    @property
    def arrived(self) -> bool:
        return bool(np.array_equal(self.position, np.asarray(self.cell, dtype=float)))

    def __repr__(self) -> str:
        return f"<Player cell={self.cell} score={self.score}>"
