"""
core/game.py
============
Central game loop and state stack manager for 4D Pacman.

Responsibilities
----------------
- Apply the graphics card preference, initialise pygame and create the
  window and the render surface from ``Settings``.
- Own a state stack; delegate update/draw to the active (top) state.
- Handle the pygame quit event and the QUIT_REQUESTED event.
- Cap the frame rate at ``target-fps`` (or not at all for ``unlimited``)
  and pass the frame time in seconds to the active state.
- Never contain gameplay logic.

Rendering
---------
States draw onto ``render_surface`` (sized by ``resolution``).  The loop
presents it to the window each frame, scaling when the two sizes differ.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pygame

import config
from core import display
from core.settings import Settings
from systems.event_queue import EventType, event_queue

log = logging.getLogger(__name__)


class Game:
    """Pygame application shell with a state stack.

    Parameters
    ----------
    settings:
        Validated settings.

    Usage
    -----
        game = Game(settings)
        game.push_state(GameplayState(settings, game.render_surface.get_size()))
        game.run()
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        display.apply_card_preference(settings.card)

        pygame.init()
        pygame.display.set_caption(config.WINDOW_TITLE)
        self._set_icon(settings.resource_path / config.ICON_FILE)

        flags, size = display.window_flags_and_size(
            settings.window,
            display.desktop_size(config.FALLBACK_DESKTOP_SIZE),
        )
        self._window = pygame.display.set_mode(size, flags)
        self.render_surface = pygame.Surface(
            display.render_size(settings.resolution, self._window.get_size())
        ).convert()
        log.info("Window %dx%d, rendering at %dx%d",
                 *self._window.get_size(), *self.render_surface.get_size())

        self._clock:   Optional[pygame.time.Clock] = None   # started by run()
        self._fps_cap = settings.target_fps or 0             # 0 = unlimited

        self._stack:   list = []
        self._running: bool = False

        event_queue.subscribe(EventType.QUIT_REQUESTED, self._on_quit_requested)

    # ------------------------------------------------------------------
    # State stack
    # ------------------------------------------------------------------

    def push_state(self, state) -> None:
        """Push *state* onto the stack and call its on_enter().

        Parameters
        ----------
        state:
            Any object implementing ``on_enter()``, ``on_exit()``, and
            ``update(events, surface, dt) -> bool``.
        """
        if self._stack:
            log.debug("Suspending state %r", self._stack[-1])
        self._stack.append(state)
        state.on_enter()
        log.debug("Pushed state %r", state)

    def pop_state(self) -> None:
        """Pop the top state and call its on_exit()."""
        if not self._stack:
            return
        state = self._stack.pop()
        state.on_exit()
        log.debug("Popped state %r", state)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Start the game loop.  Blocks until the game exits."""
        self._running = True
        log.info("Game loop started (fps cap: %s)", self._fps_cap or "unlimited")

        # Time spent pushing states before run() is not game time: frame one gets dt 0
        self._clock = pygame.time.Clock()
        first_frame = True
        try:
            while self._running and self._stack:
                events = pygame.event.get()
                for event in events:
                    if event.type == pygame.QUIT:
                        self._running = False
                if not self._running:
                    break

                dt = 0.0 if first_frame else self._clock.get_time() / 1000.0
                first_frame = False

                active = self._stack[-1]
                if active.update(events, self.render_surface, dt):
                    self.pop_state()

                display.present(self.render_surface, self._window)
                pygame.display.flip()
                self._clock.tick(self._fps_cap)
        finally:
            self._shutdown()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _set_icon(self, path: Path) -> None:
        if not path.exists():
            log.debug("No window icon at %s", path)
            return
        try:
            pygame.display.set_icon(pygame.image.load(str(path)))
        except pygame.error as exc:
            log.warning("Icon load failed %s: %s", path, exc)

    def _on_quit_requested(self, event: object) -> None:
        self._running = False

    def _shutdown(self) -> None:
        """Pop every state and tear down pygame."""
        log.info("Shutting down")
        while self._stack:
            self.pop_state()
        event_queue.unsubscribe(EventType.QUIT_REQUESTED, self._on_quit_requested)
        pygame.quit()
