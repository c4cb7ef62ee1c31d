"""
ui/maze_view.py
===============
Top-down view of the maze slice the player stands in.

Responsibilities
----------------
- Draw the x/y plane at the player's z/w layer, centred on the player's
  animated position.
- Mark cells whose passages lead up/down (z) or through a portal (w).
- Draw food in the slice, the exit in exit mode, the player, and the ghost
  when it shares the slice.
- Read session state only; never modify it, never post events.

Camera
------
The camera hangs ``config.CAMERA_HEIGHT`` cells above the floor looking
straight down, so with a field of view of ``fov`` degrees the screen spans
``2 * CAMERA_HEIGHT * tan(fov / 2)`` cells vertically.
"""

from __future__ import annotations

import logging
import math

import pygame

import config
from systems.session import Direction, GameSession
from world.maze import Cell

log = logging.getLogger(__name__)


def visible_cells(fov: float) -> float:
    """Number of cells that fit vertically for a field of view in degrees."""
    span = 2.0 * config.CAMERA_HEIGHT * math.tan(math.radians(fov) / 2.0)
    return max(config.MIN_VISIBLE_CELLS, span)


def _tint(base: tuple[int, int, int], layer: int) -> tuple[int, int, int]:
    """Blend *base* with the rainbow colour of w-layer *layer*."""
    accent = config.RAINBOW[layer % len(config.RAINBOW)]
    return tuple((b * 3 + a) // 4 for b, a in zip(base, accent))


class MazeView:
    """Draws one maze slice.

    Parameters
    ----------
    size:
        Render surface size in pixels.
    fov:
        Camera field of view in degrees.

    Usage
    -----
        view = MazeView(surface.get_size(), fov=settings.fov)

        # Each frame:
        view.draw(surface, session)
    """

    def __init__(self, size: tuple[int, int], fov: float) -> None:
        self._width, self._height = size
        self.cell_px = max(4, int(self._height / visible_cells(fov)))

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def cell_rect(self, x: float, y: float, focus: tuple[float, float]) -> pygame.Rect:
        """Screen rect of slice cell ``(x, y)`` with *focus* at screen centre."""
        left = self._width  / 2 + (x - focus[0] - 0.5) * self.cell_px
        top  = self._height / 2 + (y - focus[1] - 0.5) * self.cell_px
        return pygame.Rect(round(left), round(top), self.cell_px, self.cell_px)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self, surface: pygame.Surface, session: GameSession) -> None:
        surface.fill(config.COLOR_BG)

        maze   = session.maze
        player = session.player
        _, _, z, w = player.cell
        focus  = (float(player.position[0]), float(player.position[1]))
        bounds = surface.get_rect()

        floor = _tint(config.COLOR_FLOOR, w)
        for x in range(maze.dimensions[0]):
            for y in range(maze.dimensions[1]):
                rect = self.cell_rect(x, y, focus)
                if not rect.colliderect(bounds):
                    continue
                cell = (x, y, z, w)
                pygame.draw.rect(surface, floor, rect)
                self._draw_markers(surface, rect, session, cell)
                if maze.has_food(cell):
                    pygame.draw.circle(surface, config.COLOR_FOOD, rect.center,
                                       max(2, self.cell_px // 8))
                if session.exit_mode and cell == maze.exit:
                    pygame.draw.rect(surface, config.COLOR_EXIT, rect.inflate(-6, -6),
                                     max(1, self.cell_px // 16))
                self._draw_walls(surface, rect, session, cell)

        self._draw_ghost(surface, session, focus)

        # Player last, always at the centre of the view
        pygame.draw.circle(surface, config.COLOR_PLAYER,
                           (self._width // 2, self._height // 2),
                           max(3, int(self.cell_px * 0.3)))

    def _draw_walls(
        self,
        surface: pygame.Surface,
        rect:    pygame.Rect,
        session: GameSession,
        cell:    Cell,
    ) -> None:
        thickness = max(2, self.cell_px // 10)
        maze = session.maze
        sides = (
            (Direction.NORTH, (rect.left, rect.top), (rect.right, rect.top)),
            (Direction.SOUTH, (rect.left, rect.bottom), (rect.right, rect.bottom)),
            (Direction.WEST,  (rect.left, rect.top), (rect.left, rect.bottom)),
            (Direction.EAST,  (rect.right, rect.top), (rect.right, rect.bottom)),
        )
        for direction, start, end in sides:
            if not maze.can_move(cell, direction.value):
                pygame.draw.line(surface, config.COLOR_WALL, start, end, thickness)

    def _draw_markers(
        self,
        surface: pygame.Surface,
        rect:    pygame.Rect,
        session: GameSession,
        cell:    Cell,
    ) -> None:
        """Small glyphs for passages that leave the slice."""
        maze = session.maze
        q    = max(2, self.cell_px // 6)
        cx, cy = rect.center
        if maze.can_move(cell, Direction.ASCEND.value):
            pygame.draw.polygon(surface, config.COLOR_ASCEND,
                                [(cx - q, rect.top + 2 * q), (cx + q, rect.top + 2 * q),
                                 (cx, rect.top + q)])
        if maze.can_move(cell, Direction.DESCEND.value):
            pygame.draw.polygon(surface, config.COLOR_ASCEND,
                                [(cx - q, rect.bottom - 2 * q), (cx + q, rect.bottom - 2 * q),
                                 (cx, rect.bottom - q)])
        if maze.can_move(cell, Direction.KATA.value):
            pygame.draw.circle(surface, config.COLOR_PORTAL, (rect.left + q + 2, cy), q, 2)
        if maze.can_move(cell, Direction.ANA.value):
            pygame.draw.circle(surface, config.COLOR_PORTAL, (rect.right - q - 2, cy), q, 2)

    def _draw_ghost(
        self,
        surface: pygame.Surface,
        session: GameSession,
        focus:   tuple[float, float],
    ) -> None:
        ghost = session.ghost
        if ghost.occupied_cell[2:] != session.player.cell[2:]:
            return
        gx, gy = float(ghost.position[0]), float(ghost.position[1])
        rect = self.cell_rect(gx, gy, focus)
        radius = max(3, int(self.cell_px * 0.3))
        pygame.draw.circle(surface, config.COLOR_GHOST, rect.center, radius)
        # Skirt
        pygame.draw.rect(surface, config.COLOR_GHOST,
                         (rect.centerx - radius, rect.centery, radius * 2, radius))
