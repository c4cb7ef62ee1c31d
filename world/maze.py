"""
world/maze.py
=============
The 4D maze: cells, walls and cell contents.

Responsibilities
----------------
- Generate a perfect maze (a spanning tree over all cells) with randomized
  Kruskal's algorithm.
- Answer movement queries: can the player/ghost step from a cell along an
  axis?
- Find shortest paths (BFS) for the ghost.
- Track food placed in cells.
- Never post events; never import pygame.

Coordinates
-----------
A cell is a 4-tuple ``(x, y, z, w)`` with ``0 <= c[a] < dimensions[a]``.
``x``/``y`` span the horizontal slice shown on screen, ``z`` is height
(ascend/descend) and ``w`` is the fourth axis (portals).

Walls
-----
``passages[a]`` is a numpy boolean array of shape ``dimensions``.
``passages[a][c]`` is ``True`` when the wall between ``c`` and the cell one
step further along axis ``a`` is open.  The last layer along each axis is
always ``False``; the maze boundary is solid.
"""

from __future__ import annotations

import enum
import logging
import random
from collections import deque
from typing import Iterable, Iterator, Optional

import numpy as np

from world.disjoint_set import DisjointSet

log = logging.getLogger(__name__)

Cell  = tuple[int, int, int, int]
Delta = tuple[int, int, int, int]

AXES = 4


class MazeError(Exception):
    """Raised for invalid maze queries (cell out of bounds, no free cell)."""


class CellContents(enum.IntEnum):
    EMPTY = 0
    FOOD  = 1


def unit_axis(delta: Delta) -> tuple[int, int]:
    """Return ``(axis, sign)`` for a unit step.

    Raises
    ------
    ValueError
        If *delta* is not a single ±1 step along exactly one axis.
    """
    if len(delta) != AXES:
        raise ValueError(f"Move delta must have {AXES} components, got {delta!r}")
    moves = [(axis, step) for axis, step in enumerate(delta) if step != 0]
    if len(moves) != 1 or moves[0][1] not in (-1, 1):
        raise ValueError(f"Move delta must be a unit step along one axis, got {delta!r}")
    return moves[0]


def step(cell: Cell, axis: int, sign: int) -> Cell:
    moved = list(cell)
    moved[axis] += sign
    return tuple(moved)


class Maze:
    """A 4D grid maze.

    Parameters
    ----------
    dimensions:
        Sizes along ``(x, y, z, w)``; every size must be at least 1.

    Usage
    -----
        maze = Maze((5, 5, 3, 3))
        maze.generate(random.Random(42))

        maze.can_move((0, 0, 0, 0), (1, 0, 0, 0))
        path = maze.shortest_path(ghost_cell, player_cell)
    """

    def __init__(self, dimensions: tuple[int, int, int, int]) -> None:
        dims = tuple(int(d) for d in dimensions)
        if len(dims) != AXES or any(d < 1 for d in dims):
            raise MazeError(f"Maze needs {AXES} positive sizes, got {dimensions!r}")
        self.dimensions: Cell = dims
        self.passages: list[np.ndarray] = [np.zeros(dims, dtype=bool) for _ in range(AXES)]
        self.contents: np.ndarray = np.full(dims, CellContents.EMPTY, dtype=np.int8)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def start(self) -> Cell:
        """Where the player spawns."""
        return (0, 0, 0, 0)

    @property
    def exit(self) -> Cell:
        """The far corner, used as the goal when there is no food."""
        return tuple(d - 1 for d in self.dimensions)

    @property
    def cell_count(self) -> int:
        return int(np.prod(self.dimensions))

    def in_bounds(self, cell: Iterable[int]) -> bool:
        cell = tuple(cell)
        return len(cell) == AXES and all(0 <= c < d for c, d in zip(cell, self.dimensions))

    def cells(self) -> Iterator[Cell]:
        """Iterate every cell in index order."""
        for index in np.ndindex(*self.dimensions):
            yield tuple(int(i) for i in index)

    def _check(self, cell: Cell) -> None:
        if not self.in_bounds(cell):
            raise MazeError(f"Cell {cell!r} outside maze of size {self.dimensions!r}")

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate(self, rng: Optional[random.Random] = None) -> None:
        """Carve a perfect maze with randomized Kruskal's algorithm.

        Every interior wall between two axis neighbours is a candidate edge.
        Edges are visited in random order; a wall is opened whenever the
        cells on either side are not yet connected.  The result connects all
        cells with exactly ``cell_count - 1`` open walls and no loops.

        Parameters
        ----------
        rng:
            Random source; a fresh unseeded ``random.Random`` if omitted.
        """
        rng = rng or random.Random()
        for passage in self.passages:
            passage[...] = False

        edges: list[tuple[Cell, int]] = [
            (cell, axis)
            for cell in self.cells()
            for axis in range(AXES)
            if cell[axis] < self.dimensions[axis] - 1
        ]
        rng.shuffle(edges)

        sets: DisjointSet[Cell] = DisjointSet()
        for cell in self.cells():
            sets.add(cell)

        opened = 0
        for cell, axis in edges:
            if sets.union(cell, step(cell, axis, 1)):
                self.passages[axis][cell] = True
                opened += 1

        log.info("Generated %s maze: %d cells, %d passages",
                 "x".join(map(str, self.dimensions)), self.cell_count, opened)

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def can_move(self, cell: Cell, delta: Delta) -> bool:
        """Return True if one step by *delta* from *cell* passes no wall.

        Raises
        ------
        ValueError
            If *delta* is not a unit step along one axis.
        """
        axis, sign = unit_axis(delta)
        if not self.in_bounds(cell):
            return False
        target = step(cell, axis, sign)
        if not self.in_bounds(target):
            return False
        wall_cell = cell if sign > 0 else target
        return bool(self.passages[axis][wall_cell])

    def neighbours(self, cell: Cell) -> list[Cell]:
        """Cells reachable from *cell* in one step."""
        result = []
        for axis in range(AXES):
            for sign in (-1, 1):
                delta = [0] * AXES
                delta[axis] = sign
                if self.can_move(cell, tuple(delta)):
                    result.append(step(cell, axis, sign))
        return result

    def shortest_path(self, start: Cell, goal: Cell) -> list[Cell]:
        """Breadth-first search from *start* to *goal*.

        Returns
        -------
        list[Cell]
            Cells from *start* to *goal*, both inclusive.  ``[start]`` when
            they are the same cell.

        Raises
        ------
        MazeError
            If either cell is outside the maze or *goal* is unreachable.
        """
        start, goal = tuple(start), tuple(goal)
        self._check(start)
        self._check(goal)
        if start == goal:
            return [start]

        came_from: dict[Cell, Optional[Cell]] = {start: None}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for nxt in self.neighbours(current):
                if nxt in came_from:
                    continue
                came_from[nxt] = current
                if nxt == goal:
                    return _walk_back(came_from, goal)
                queue.append(nxt)

        raise MazeError(f"No path from {start!r} to {goal!r}")

    # ------------------------------------------------------------------
    # Contents
    # ------------------------------------------------------------------

    def random_empty_cell(
        self,
        rng:     random.Random,
        exclude: Iterable[Cell] = (),
    ) -> Cell:
        """Pick a uniformly random empty cell not listed in *exclude*.

        Raises
        ------
        MazeError
            If every cell is occupied or excluded.
        """
        excluded   = {tuple(c) for c in exclude}
        candidates = [
            cell for cell in self.cells()
            if cell not in excluded and self.contents[cell] == CellContents.EMPTY
        ]
        if not candidates:
            raise MazeError("No empty cell left in the maze")
        return rng.choice(candidates)

    def place_food(self, cell: Cell) -> None:
        self._check(cell)
        self.contents[cell] = CellContents.FOOD

    def has_food(self, cell: Cell) -> bool:
        return self.in_bounds(cell) and self.contents[tuple(cell)] == CellContents.FOOD

    def take_food(self, cell: Cell) -> bool:
        """Clear food from *cell*.  Returns True if there was food to take."""
        if not self.has_food(cell):
            return False
        self.contents[tuple(cell)] = CellContents.EMPTY
        return True

    def food_cells(self) -> list[Cell]:
        return [tuple(int(i) for i in idx)
                for idx in np.argwhere(self.contents == CellContents.FOOD)]

    def __repr__(self) -> str:
        return f"<Maze {'x'.join(map(str, self.dimensions))} food={len(self.food_cells())}>"


def _walk_back(came_from: dict[Cell, Optional[Cell]], goal: Cell) -> list[Cell]:
    path = [goal]
    while came_from[path[-1]] is not None:
        path.append(came_from[path[-1]])
    path.reverse()
    return path
