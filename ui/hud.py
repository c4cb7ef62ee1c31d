"""
ui/hud.py
=========
On-screen display drawn over the maze view.

Layout
------
    ┌────────────────────────────────────────────┐
    │ 01:23                              04/10   │  clock / score
    │                                 z 2/3 w 1/3│  layer indicator
    │                                            │
    │              (maze view)                   │
    │                                            │
    │ [Q][W][E]  [SPC]                           │  controls overlay
    │ [A][S][D]  [CTL]                           │
    └────────────────────────────────────────────┘

Every size is multiplied by the ``ui-scale`` setting.  Control keys whose
direction is blocked from the player's cell are drawn dimmed.  A banner
covers the view once the run is won or lost.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pygame

import config
from core.settings import Settings
from systems.event_queue import Event, EventType, event_queue
from systems.session import Direction, GameSession, RunState

log = logging.getLogger(__name__)

# (direction, key label, column, row), laid out like the keyboard
_CONTROL_LAYOUT: list[tuple[Direction, str, float, int]] = [
    (Direction.KATA,    "Q",   0.0, 0),
    (Direction.NORTH,   "W",   1.0, 0),
    (Direction.ANA,     "E",   2.0, 0),
    (Direction.WEST,    "A",   0.0, 1),
    (Direction.SOUTH,   "S",   1.0, 1),
    (Direction.EAST,    "D",   2.0, 1),
    (Direction.ASCEND,  "SPC", 3.5, 0),
    (Direction.DESCEND, "CTL", 3.5, 1),
]

_BANNERS: dict[str, str] = {
    "food":   "ALL FOOD EATEN",
    "exit":   "ESCAPED",
    "caught": "CAUGHT",
    "time":   "TIME UP",
}

# Seconds the score stays highlighted after eating
_FLASH_TIME = 0.4


class Hud:
    """Heads-up display.

    Parameters
    ----------
    size:
        Render surface size in pixels.
    settings:
        Supplies ``ui_scale`` and ``display_controls``.
    font_path:
        Optional path to a .ttf font; falls back to system monospace.

    Usage
    -----
        hud = Hud(surface.get_size(), settings, font_path=...)

        # Each frame, after the maze view:
        hud.draw(surface, session, dt)

        # On state exit:
        hud.teardown()
    """

    def __init__(
        self,
        size:      tuple[int, int],
        settings:  Settings,
        font_path: Optional[str] = None,
    ) -> None:
        self._width, self._height = size
        self._scale    = settings.ui_scale
        self._controls = settings.display_controls
        self._pad      = max(4, int(12 * self._scale))
        self._key_px   = max(12, int(40 * self._scale))
        self._flash    = 0.0

        self._font   = self._load_font(font_path, max(8, int(config.HUD_FONT_SIZE * self._scale)))
        self._small  = self._load_font(font_path, max(8, int(config.HUD_FONT_SIZE * 0.6 * self._scale)))
        self._banner = self._load_font(font_path, max(12, int(config.HUD_FONT_SIZE * 2.5 * self._scale)))

        event_queue.subscribe(EventType.FOOD_EATEN, self._on_food_eaten)

    def teardown(self) -> None:
        event_queue.unsubscribe(EventType.FOOD_EATEN, self._on_food_eaten)

    # ------------------------------------------------------------------
    # Text helpers (also used by tests)
    # ------------------------------------------------------------------

    @staticmethod
    def score_text(session: GameSession) -> str:
        if session.exit_mode:
            return "FIND THE EXIT"
        return f"{session.player.score:02d}/{session.food.total:02d}"

    @staticmethod
    def layer_text(session: GameSession) -> str:
        _, _, z, w = session.player.cell
        _, _, depth, portals = session.maze.dimensions
        return f"z {z + 1}/{depth}  w {w + 1}/{portals}"

    @staticmethod
    def banner_text(session: GameSession) -> Optional[str]:
        if session.state is RunState.PLAYING:
            return None
        return _BANNERS.get(session.reason, session.state.value.upper())

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self, surface: pygame.Surface, session: GameSession, dt: float = 0.0) -> None:
        self._flash = max(0.0, self._flash - dt)

        # Clock, top left
        clock_text = session.clock.display_text()
        if clock_text is not None:
            self._blit(surface, self._font, clock_text, (self._pad, self._pad),
                       config.COLOR_HUD)

        # Score, top right
        score_colour = config.COLOR_FOOD if self._flash > 0 else config.COLOR_HUD
        score = self._font.render(self.score_text(session), True, score_colour)
        surface.blit(score, (self._width - score.get_width() - self._pad, self._pad))

        # Layer indicator under the score
        layer = self._small.render(self.layer_text(session), True, config.COLOR_HUD_DIM)
        surface.blit(layer, (self._width - layer.get_width() - self._pad,
                             self._pad + score.get_height()))

        if self._controls and not session.finished:
            self._draw_controls(surface, session)

        banner = self.banner_text(session)
        if banner is not None:
            self._draw_banner(surface, session, banner)

    def _draw_controls(self, surface: pygame.Surface, session: GameSession) -> None:
        open_moves = session.available_moves()
        key  = self._key_px
        gap  = max(2, key // 8)
        left = self._pad
        top  = self._height - self._pad - 2 * key - gap
        for direction, label, col, row in _CONTROL_LAYOUT:
            width  = key * 2 if len(label) > 1 else key
            rect   = pygame.Rect(int(left + col * (key + gap)), top + row * (key + gap), width, key)
            colour = config.COLOR_HUD if open_moves[direction] else config.COLOR_HUD_DIM
            pygame.draw.rect(surface, colour, rect, max(1, key // 16))
            text = self._small.render(label, True, colour)
            surface.blit(text, text.get_rect(center=rect.center))

    def _draw_banner(self, surface: pygame.Surface, session: GameSession, text: str) -> None:
        overlay = pygame.Surface((self._width, self._height), pygame.SRCALPHA)
        colour  = config.COLOR_WIN if session.state is RunState.WON else config.COLOR_LOSE
        overlay.fill((*colour, 170))
        surface.blit(overlay, (0, 0))

        label = self._banner.render(text, True, config.COLOR_HUD)
        surface.blit(label, label.get_rect(center=(self._width // 2, self._height // 2)))
        hint = self._small.render("R: new maze    ESC: quit", True, config.COLOR_HUD)
        surface.blit(hint, hint.get_rect(
            center=(self._width // 2, self._height // 2 + label.get_height())))

    @staticmethod
    def _blit(surface, font, text, pos, colour) -> None:
        surface.blit(font.render(text, True, colour), pos)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_food_eaten(self, event: Event) -> None:
        self._flash = _FLASH_TIME

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _load_font(font_path: Optional[str], size: int) -> pygame.font.Font:
        """Load font from *font_path* or fall back to system monospace."""
        if font_path:
            p = Path(font_path)
            if p.exists():
                try:
                    return pygame.font.Font(str(p), size)
                except (pygame.error, OSError) as exc:
                    log.warning("Font load failed %r: %s", font_path, exc)
            else:
                log.info("Font %s not found; using system monospace", font_path)
        return pygame.font.SysFont("monospace", size)
