"""
core/display.py
===============
Display setup helpers: graphics card preference, window mode, render
resolution, and presenting the render surface.

Split from ``core/game.py`` so the size and flag decisions can be checked
without opening a window.
"""

from __future__ import annotations

import logging
import os
from typing import MutableMapping, Optional

import pygame

from core.settings import CardKind, CardPreference, WindowMode, WindowSpec

log = logging.getLogger(__name__)

# Mesa's GPU offload switch.  Read by the GL driver when the window's
# context is created, so it must be set before pygame.display.set_mode().
CARD_ENV_VAR = "DRI_PRIME"


def apply_card_preference(
    card:    CardPreference,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Optional[str]:
    """Ask the driver for the configured graphics card.

    ``discrete`` maps to ``DRI_PRIME=1``; a card index maps to
    ``DRI_PRIME=<index>``.  A value already present in the environment is
    left alone so users can still override it from the shell.

    Returns
    -------
    str or None
        The value now in effect.
    """
    environ = os.environ if environ is None else environ
    wanted = "1" if card.kind is CardKind.DISCRETE else str(card.index)
    current = environ.get(CARD_ENV_VAR)
    if current is not None:
        if current != wanted:
            log.warning("%s=%s from the environment overrides card: %s",
                        CARD_ENV_VAR, current, card)
        return current
    environ[CARD_ENV_VAR] = wanted
    log.debug("Requested graphics card %s (%s=%s)", card, CARD_ENV_VAR, wanted)
    return wanted


def window_flags_and_size(
    window:       WindowSpec,
    desktop_size: tuple[int, int],
) -> tuple[int, tuple[int, int]]:
    """Return ``(flags, size)`` for ``pygame.display.set_mode``.

    Parameters
    ----------
    window:
        The ``window`` setting.
    desktop_size:
        Size of the primary desktop, used by ``max`` and ``fullscreen``.
    """
    if window.mode is WindowMode.FULLSCREEN:
        return pygame.FULLSCREEN, desktop_size
    if window.mode is WindowMode.MAX:
        return pygame.NOFRAME, desktop_size
    return 0, window.size


def render_size(
    resolution:  Optional[tuple[int, int]],
    window_size: tuple[int, int],
) -> tuple[int, int]:
    """Size of the surface the game draws on (``max`` matches the window)."""
    return tuple(resolution) if resolution is not None else tuple(window_size)


def desktop_size(fallback: tuple[int, int]) -> tuple[int, int]:
    """Primary desktop size, or *fallback* if the driver reports none."""
    try:
        sizes = pygame.display.get_desktop_sizes()
    except pygame.error:
        sizes = []
    if sizes and min(sizes[0]) > 0:
        return tuple(sizes[0])
    return fallback


def present(render_surface: pygame.Surface, window: pygame.Surface) -> None:
    """Copy the render surface to the window, scaling if the sizes differ."""
    if render_surface.get_size() == window.get_size():
        window.blit(render_surface, (0, 0))
    else:
        pygame.transform.smoothscale(render_surface, window.get_size(), window)
