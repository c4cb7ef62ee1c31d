"""
systems/food.py
===============
Food pickups scattered through the maze.

Food lives in the maze's cell contents; this system places it, collects it
and keeps the counts the HUD shows.  Posts ``FOOD_EATEN`` on collection.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable

from systems.event_queue import EventType, event_queue
from world.maze import Cell, Maze

log = logging.getLogger(__name__)


class FoodSystem:
    """Places and tracks food.

    Parameters
    ----------
    maze:
        The maze whose cells hold the food.

    Usage
    -----
        food = FoodSystem(maze)
        food.scatter(count=10, rng=rng, avoid=[maze.start])

        if food.collect(player.cell):
            player.score += 1
    """

    def __init__(self, maze: Maze) -> None:
        self._maze  = maze
        self._total = 0

    def scatter(
        self,
        count: int,
        rng:   random.Random,
        avoid: Iterable[Cell] = (),
    ) -> list[Cell]:
        """Place *count* food items on distinct random empty cells.

        Cells in *avoid* never receive food.

        Raises
        ------
        world.maze.MazeError
            If there are not enough free cells.
        """
        avoid  = [tuple(c) for c in avoid]
        placed = []
        for _ in range(count):
            cell = self._maze.random_empty_cell(rng, exclude=avoid)
            self._maze.place_food(cell)
            placed.append(cell)
        self._total += len(placed)
        log.info("Scattered %d food", len(placed))
        return placed

    def collect(self, cell: Cell) -> bool:
        """Eat the food at *cell* if there is any."""
        if not self._maze.take_food(cell):
            return False
        event_queue.post_event(
            EventType.FOOD_EATEN,
            {"cell": tuple(cell), "remaining": self.remaining},
            source="FoodSystem",
        )
        log.debug("Food eaten at %r, %d left", cell, self.remaining)
        return True

    @property
    def total(self) -> int:
        return self._total

    @property
    def remaining(self) -> int:
        return len(self._maze.food_cells())

    @property
    def collected(self) -> int:
        return self._total - self.remaining

    @property
    def all_collected(self) -> bool:
        return self.remaining == 0

    def __repr__(self) -> str:
        return f"<FoodSystem {self.collected}/{self.total}>"
