"""
gamestates/base_state.py
========================
Abstract base class for all game states in 4D Pacman.

Every state must implement:
    on_enter()                   Called once when the state becomes active.
    on_exit()                    Called once when the state is popped.
    update(events, surface, dt)  Called every frame; returns True to be popped.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import pygame


class BaseState(ABC):
    """Abstract base for all game states."""

    @abstractmethod
    def on_enter(self) -> None:
        """Called when this state is pushed onto the stack."""

    @abstractmethod
    def on_exit(self) -> None:
        """Called when this state is popped from the stack."""

    @abstractmethod
    def update(
        self,
        events:  list[pygame.event.Event],
        surface: pygame.Surface,
        dt:      float,
    ) -> bool:
        """Process events, advance by *dt* seconds and draw one frame.

        Parameters
        ----------
        events:
            pygame event list from the game loop.
        surface:
            Render surface to draw on.
        dt:
            Seconds since the previous frame.

        Returns
        -------
        bool
            ``True`` if the state wants to be popped.
        """
