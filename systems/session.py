"""
systems/session.py
==================
One run of the game: the rules that tie the maze, player, ghost, food and
clock together.

Responsibilities
----------------
- Build every system for a run from ``Settings`` and a seed.
- Accept movement requests and apply the maze's walls.
- Advance time: clock, player slide, ghost pursuit.
- Decide when the run is won or lost and post the outcome.
- Flush the event queue at the end of every request/update.
- Never render anything; never import pygame.

Rules
-----
Win     Every food item collected.  With ``food-count: 0`` the goal is the
        exit in the far corner of the maze instead.
Lose    The ghost reaches the player, or a countdown clock runs out.
        A catch is checked before the win, so eating the last food on the
        ghost's cell still loses.
"""

from __future__ import annotations

import enum
import logging
import random
from typing import Optional, Union

from core.settings import Settings
from systems.clock import GameClock
from systems.event_queue import EventType, event_queue
from systems.food import FoodSystem
from systems.ghost import Ghost
from systems.player import Player
from world.maze import Delta, Maze

log = logging.getLogger(__name__)


class Direction(enum.Enum):
    """The eight moves available in a 4D maze."""
    NORTH   = (0, -1, 0, 0)
    SOUTH   = (0, 1, 0, 0)
    WEST    = (-1, 0, 0, 0)
    EAST    = (1, 0, 0, 0)
    ASCEND  = (0, 0, 1, 0)
    DESCEND = (0, 0, -1, 0)
    KATA    = (0, 0, 0, -1)   # portal toward lower w
    ANA     = (0, 0, 0, 1)    # portal toward higher w


class RunState(enum.Enum):
    PLAYING = "playing"
    WON     = "won"
    LOST    = "lost"


class GameSession:
    """Owns all systems for a single run.

    Parameters
    ----------
    settings:
        Validated settings; ``dimensions``, ``food_count``,
        ``ghost_move_time`` and ``display_clock`` shape the run.
    seed:
        RNG seed for maze, food and ghost placement.  Random if ``None``.

    Usage
    -----
        session = GameSession(settings, seed=7)
        session.request_move(Direction.EAST)

        # Each frame:
        session.update(dt)
        if session.state is not RunState.PLAYING:
            ...
    """

    def __init__(self, settings: Settings, seed: Optional[int] = None) -> None:
        self.settings = settings
        self.seed     = seed if seed is not None else random.randint(0, 2 ** 32 - 1)
        rng = random.Random(self.seed)

        log.info("Starting run (seed=%d)", self.seed)

        self.maze = Maze(settings.dimensions)
        self.maze.generate(rng)

        self.player = Player(self.maze.start)
        self.food   = FoodSystem(self.maze)
        self.food.scatter(settings.food_count, rng, avoid=[self.maze.start])
        self.ghost  = Ghost.spawn(
            self.maze, rng,
            avoid     = self.maze.start,
            move_time = settings.ghost_move_time,
        )
        self.clock  = GameClock(settings.display_clock)

        self.state:  RunState      = RunState.PLAYING
        self.reason: Optional[str] = None

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def request_move(self, move: Union[Direction, Delta]) -> bool:
        """Move the player one cell if the maze allows it.

        Parameters
        ----------
        move:
            A ``Direction`` or a raw unit delta.

        Returns
        -------
        bool
            ``True`` if the player moved.  Always ``False`` once the run
            is over.
        """
        if self.state is not RunState.PLAYING:
            return False
        delta = move.value if isinstance(move, Direction) else tuple(move)
        if not self.maze.can_move(self.player.cell, delta):
            return False

        previous = self.player.cell
        self.player.move(delta)
        event_queue.post_event(
            EventType.PLAYER_MOVED,
            {"from": previous, "to": self.player.cell},
            source="GameSession",
        )
        if self.food.collect(self.player.cell):
            self.player.score += 1

        self._check_end()
        event_queue.flush()
        return True

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    def update(self, dt: float) -> None:
        """Advance the run by *dt* seconds."""
        self.player.update(dt)
        if self.state is RunState.PLAYING:
            self.clock.tick(dt)
            self.ghost.update(dt, self.player.cell)
            self._check_end()
        event_queue.flush()

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    @property
    def exit_mode(self) -> bool:
        """True when the run is won by reaching the exit instead of eating."""
        return self.food.total == 0

    def _check_end(self) -> None:
        if self.state is not RunState.PLAYING:
            return
        if self.ghost.occupied_cell == self.player.cell:
            self._finish(RunState.LOST, "caught")
        elif self.exit_mode and self.player.cell == self.maze.exit:
            self._finish(RunState.WON, "exit")
        elif not self.exit_mode and self.food.all_collected:
            self._finish(RunState.WON, "food")
        elif self.clock.expired:
            self._finish(RunState.LOST, "time")

    def _finish(self, state: RunState, reason: str) -> None:
        self.state  = state
        self.reason = reason
        self.clock.stop()
        payload = {
            "reason":  reason,
            "score":   self.player.score,
            "total":   self.food.total,
            "elapsed": self.clock.elapsed,
        }
        event_type = EventType.GAME_WON if state is RunState.WON else EventType.GAME_LOST
        event_queue.post_event(event_type, payload, source="GameSession")
        log.info("Run %s (%s) after %.1fs, %d/%d food",
                 state.value, reason, self.clock.elapsed, self.player.score, self.food.total)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def available_moves(self) -> dict[Direction, bool]:
        """Which directions are open from the player's cell."""
        return {d: self.maze.can_move(self.player.cell, d.value) for d in Direction}

    @property
    def finished(self) -> bool:
        return self.state is not RunState.PLAYING

    def __repr__(self) -> str:
        return f"<GameSession seed={self.seed} state={self.state.name} {self.player!r}>"
