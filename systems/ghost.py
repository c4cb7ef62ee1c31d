"""
systems/ghost.py
================
The ghost that hunts the player through the maze.

Responsibilities
----------------
- Step one cell at a time, taking ``move_time`` seconds per step.
- On reaching a cell, pick the next one on the shortest path to the
  player's current cell (BFS through the maze).
- Interpolate a drawing position between the two cells of a step.
- Post ``GHOST_MOVED`` whenever a new step starts.
- Never render anything; never import pygame.

Catching
--------
While a step is under way the ghost occupies its origin cell for the first
half of the step and its target cell for the second half
(``occupied_cell``).  The session declares the player caught when that cell
equals the player's cell.
"""

from __future__ import annotations

import logging
import random

import numpy as np

from systems.event_queue import EventType, event_queue
from world.maze import Cell, Maze

log = logging.getLogger(__name__)


class Ghost:
    """A single pursuing ghost.

    Parameters
    ----------
    maze:
        The maze the ghost moves through.
    start:
        Spawn cell.
    move_time:
        Seconds per one-cell step (``ghost-move-time`` setting).
    name:
        Label used in logs and event payloads.

    Usage
    -----
        ghost = Ghost.spawn(maze, rng, avoid=maze.start, move_time=1.65)

        # Each frame:
        ghost.update(dt, player.cell)
        if ghost.occupied_cell == player.cell:
            ...   # caught
    """

    def __init__(
        self,
        maze:      Maze,
        start:     Cell,
        move_time: float,
        name:      str = "GHOST",
    ) -> None:
        if move_time <= 0:
            raise ValueError(f"Ghost move time must be positive, got {move_time}")
        self._maze     = maze
        self.name      = name
        self.move_time = move_time
        self.origin:   Cell  = tuple(start)
        self.target:   Cell  = tuple(start)
        self._elapsed: float = 0.0
        self.steps:    int   = 0

    @classmethod
    def spawn(
        cls,
        maze:      Maze,
        rng:       random.Random,
        avoid:     Cell,
        move_time: float,
        name:      str = "GHOST",
    ) -> "Ghost":
        """Create a ghost on a random cell other than *avoid*."""
        cell = rng.choice([c for c in maze.cells() if c != tuple(avoid)])
        log.info("Ghost %r spawned at %r", name, cell)
        return cls(maze, cell, move_time, name)

    # ------------------------------------------------------------------
    # Per-frame update
    # ------------------------------------------------------------------

    def update(self, dt: float, player_cell: Cell) -> None:
        """Advance the ghost by *dt* seconds, chasing *player_cell*."""
        self._elapsed += dt
        if self.idle:
            self._choose_next(player_cell)
        while not self.idle and self._elapsed >= self.move_time:
            self._elapsed -= self.move_time
            self.origin = self.target
            self._choose_next(player_cell)
        if self.idle:
            self._elapsed = 0.0

    def _choose_next(self, player_cell: Cell) -> None:
        if self.origin == tuple(player_cell):
            self.target = self.origin
            return
        path = self._maze.shortest_path(self.origin, player_cell)
        self.target = path[1]
        self.steps += 1
        event_queue.post_event(
            EventType.GHOST_MOVED,
            {"name": self.name, "from": self.origin, "to": self.target},
            source="Ghost",
        )
        log.debug("Ghost %r heading %r -> %r", self.name, self.origin, self.target)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def idle(self) -> bool:
        """True when the ghost is standing still (it has reached the player)."""
        return self.origin == self.target

    @property
    def progress(self) -> float:
        """Fraction of the current step completed, in ``[0.0, 1.0]``."""
        if self.idle:
            return 0.0
        return max(0.0, min(1.0, self._elapsed / self.move_time))

    @property
    def position(self) -> np.ndarray:
        """Interpolated 4D position for drawing."""
        origin = np.asarray(self.origin, dtype=float)
        target = np.asarray(self.target, dtype=float)
        return origin + (target - origin) * self.progress

    @property
    def occupied_cell(self) -> Cell:
        return self.target if self.progress >= 0.5 else self.origin

    def __repr__(self) -> str:
        return f"<Ghost {self.name!r} {self.origin}->{self.target} {self.progress:.2f}>"
