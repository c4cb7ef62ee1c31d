"""
gamestates/gameplay.py
======================
Core gameplay state for 4D Pacman.

Responsibilities
----------------
- Own the ``GameSession`` for the current run and start new ones.
- Translate key presses into session moves.
- Drive the per-frame loop: session.update(dt) → maze view → HUD.
- Never contain game rules; those live in ``systems/session.py``.

Controls
--------
    W / Up      north            S / Down    south
    A / Left    west             D / Right   east
    Space       ascend (z + 1)   Left Ctrl   descend (z - 1)
    Q           portal (w - 1)   E           portal (w + 1)
    R           new maze (once the run is over)
    Escape      quit

Moves fire on key-down only; holding a key does not repeat.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

import pygame

import config
from core.settings import Settings
from gamestates.base_state import BaseState
from systems.event_queue import Event, EventType, event_queue
from systems.session import Direction, GameSession
from ui.hud import Hud
from ui.maze_view import MazeView

log = logging.getLogger(__name__)

KEY_BINDINGS: dict[int, Direction] = {
    pygame.K_w:      Direction.NORTH,
    pygame.K_UP:     Direction.NORTH,
    pygame.K_s:      Direction.SOUTH,
    pygame.K_DOWN:   Direction.SOUTH,
    pygame.K_a:      Direction.WEST,
    pygame.K_LEFT:   Direction.WEST,
    pygame.K_d:      Direction.EAST,
    pygame.K_RIGHT:  Direction.EAST,
    pygame.K_SPACE:  Direction.ASCEND,
    pygame.K_LCTRL:  Direction.DESCEND,
    pygame.K_q:      Direction.KATA,
    pygame.K_e:      Direction.ANA,
}


class GameplayState(BaseState):
    """Plays runs back to back until the player quits.

    Parameters
    ----------
    settings:
        Validated settings.
    size:
        Render surface size in pixels.
    seed:
        Seed for the first run.  Later runs draw seeds from an RNG seeded
        with it, so a seeded session replays the same sequence of mazes.

    Usage (inside Game)
    -------------------
        state = GameplayState(settings, game.render_surface.get_size(), seed=7)
        game.push_state(state)
    """

    def __init__(
        self,
        settings: Settings,
        size:     tuple[int, int],
        seed:     Optional[int] = None,
    ) -> None:
        self._settings = settings
        self._size     = size
        self._seeds    = random.Random(seed)
        self._first_seed = seed

        self.session: Optional[GameSession] = None
        self._view:   Optional[MazeView]    = None
        self._hud:    Optional[Hud]         = None
        self._quit:   bool                  = False
        self._runs:   int                   = 0

    # ------------------------------------------------------------------
    # BaseState interface
    # ------------------------------------------------------------------

    def on_enter(self) -> None:
        font_path = str(self._settings.resource_path / config.FONT_FILE)
        self._view = MazeView(self._size, fov=self._settings.fov)
        self._hud  = Hud(self._size, self._settings, font_path=font_path)
        event_queue.subscribe(EventType.GAME_WON,  self._on_run_over)
        event_queue.subscribe(EventType.GAME_LOST, self._on_run_over)
        self._new_run()

    def on_exit(self) -> None:
        if self._hud:
            self._hud.teardown()
        event_queue.unsubscribe(EventType.GAME_WON,  self._on_run_over)
        event_queue.unsubscribe(EventType.GAME_LOST, self._on_run_over)
        log.info("GameplayState.on_exit after %d run(s)", self._runs)

    def update(
        self,
        events:  list[pygame.event.Event],
        surface: pygame.Surface,
        dt:      float,
    ) -> bool:
        for event in events:
            if event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

        self.session.update(dt)

        self._view.draw(surface, self.session)
        self._hud.draw(surface, self.session, dt)
        return self._quit

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_key(self, key: int) -> None:
        """Apply one key press."""
        if key == pygame.K_ESCAPE:
            self._quit = True
            event_queue.post_event(EventType.QUIT_REQUESTED, source="GameplayState")
            event_queue.flush()
            return
        if self.session.finished:
            if key == pygame.K_r:
                self._new_run()
            return
        direction = KEY_BINDINGS.get(key)
        if direction is not None:
            self.session.request_move(direction)

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------

    def _new_run(self) -> None:
        if self._runs == 0 and self._first_seed is not None:
            seed = self._first_seed
        else:
            seed = self._seeds.randint(0, 2 ** 32 - 1)
        self.session = GameSession(self._settings, seed=seed)
        self._runs += 1

    def _on_run_over(self, event: Event) -> None:
        log.info("Run %d over: %s (%s)", self._runs, event.type.name, event.payload.get("reason"))
