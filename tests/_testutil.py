from __future__ import annotations

import os
import sys
from pathlib import Path

# Headless pygame for every test module that draws
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


def ensure_repo_on_path() -> Path:
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))
    return repo_root


ensure_repo_on_path()

from core.settings import Settings  # noqa: E402
from systems.event_queue import EventType, event_queue  # noqa: E402
from world.maze import Maze  # noqa: E402


def line_maze(length: int) -> Maze:
    """A ``length x 1 x 1 x 1`` corridor with every wall along x open."""
    maze = Maze((length, 1, 1, 1))
    maze.passages[0][: length - 1, 0, 0, 0] = True
    return maze


def small_settings(**overrides) -> Settings:
    values = {"dimensions": (3, 1, 1, 1), "food_count": 0, "ghost_move_time": 100.0}
    values.update(overrides)
    return Settings(**values)


class Recorder:
    """Collects events of the given types from the shared queue."""

    def __init__(self, *types: EventType) -> None:
        self.events = []
        self._types = types
        for event_type in types:
            event_queue.subscribe(event_type, self)

    def __call__(self, event) -> None:
        self.events.append(event)

    def of(self, event_type: EventType) -> list:
        return [e for e in self.events if e.type is event_type]

    def close(self) -> None:
        event_queue.unsubscribe_all(self)
