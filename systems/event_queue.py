"""
systems/event_queue.py
======================
Event bus for 4D Pacman.

Architecture
------------
This module is decoupled from pygame, game states and rendering.  It is the
single message bus that connects game systems (player, ghost, food, clock)
with the UI and the game loop without them holding references to each other.

Events are posted during a session update and delivered when the session
calls ``flush()`` at the end of that update.

Subscriber protocol
-------------------
Any callable ``handler(event: Event) -> None`` can subscribe to an event
type.  Handlers are called in registration order.  A handler that raises is
logged and the remaining handlers still run.  Use ``subscribe`` /
``unsubscribe`` to manage lifetime (e.g. unsubscribe when a game state
exits).
"""

from __future__ import annotations

import enum
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------

class EventType(enum.Enum):
    """Every event type the game posts."""

    # --- Player ---
    PLAYER_MOVED    = "player_moved"     # player committed to a new cell
    FOOD_EATEN      = "food_eaten"       # player collected a food item

    # --- Ghost ---
    GHOST_MOVED     = "ghost_moved"      # ghost picked its next cell

    # --- Outcome ---
    GAME_WON        = "game_won"
    GAME_LOST       = "game_lost"

    # --- System ---
    QUIT_REQUESTED  = "quit_requested"   # clean shutdown requested


@dataclass
class Event:
    """Event record passed to subscribers.

    Parameters
    ----------
    type:
        The ``EventType`` that identifies this event.
    payload:
        Flat dict of event data (cells are plain tuples).
    source:
        Optional human-readable tag for debugging (e.g. ``"Ghost"``).
    """

    type:    EventType
    payload: dict[str, Any] = field(default_factory=dict)
    source:  str            = ""

    def __repr__(self) -> str:
        src = f" from={self.source!r}" if self.source else ""
        return f"<Event {self.type.name}{src}>"


Handler = Callable[[Event], None]


class EventQueue:
    """Central message bus.

    Usage
    -----
        from systems.event_queue import event_queue, EventType

        event_queue.subscribe(EventType.FOOD_EATEN, on_food)
        event_queue.post_event(EventType.FOOD_EATEN, {"cell": (1, 0, 0, 0)})
        event_queue.flush()
    """

    def __init__(self) -> None:
        self._pending:     list[Event] = []
        self._subscribers: defaultdict[EventType, list[Handler]] = defaultdict(list)
        self._flushing:    bool = False   # re-entrancy guard

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------

    def subscribe(self, event_type: EventType, handler: Handler) -> None:
        """Register *handler* for *event_type*.  Duplicates are ignored."""
        handlers = self._subscribers[event_type]
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_type: EventType, handler: Handler) -> None:
        """Remove *handler* from *event_type*.  Safe if never registered."""
        handlers = self._subscribers[event_type]
        if handler in handlers:
            handlers.remove(handler)

    def unsubscribe_all(self, handler: Handler) -> None:
        """Remove *handler* from every event type it was registered to."""
        for handlers in self._subscribers.values():
            if handler in handlers:
                handlers.remove(handler)

    # ------------------------------------------------------------------
    # Posting
    # ------------------------------------------------------------------

    def post(self, event: Event) -> None:
        """Enqueue *event* for the next ``flush()``.

        Events posted while a flush is running are delivered in that same
        flush.
        """
        self._pending.append(event)
        log.debug("Enqueued %r", event)

    def post_event(
        self,
        event_type: EventType,
        payload:    dict[str, Any] | None = None,
        source:     str = "",
    ) -> None:
        """Build an ``Event`` and ``post()`` it; like ``post()`` it waits for ``flush()``."""
        self.post(Event(type=event_type, payload=payload or {}, source=source))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def flush(self) -> None:
        """Dispatch all pending events to their subscribers.

        Re-entrant posts made by handlers are appended to the working list
        and delivered before this call returns.  Events nobody listens to
        are dropped (logged at DEBUG).
        """
        if self._flushing:
            return

        self._flushing = True
        try:
            i = 0
            while i < len(self._pending):
                event    = self._pending[i]
                handlers = list(self._subscribers.get(event.type, []))
                if not handlers:
                    log.debug("No subscribers for %r", event)
                for handler in handlers:
                    try:
                        handler(event)
                    except Exception:
                        log.exception("Handler %r raised while processing %r", handler, event)
                i += 1
        finally:
            self._pending.clear()
            self._flushing = False

    def clear(self) -> None:
        """Drop pending events without delivering them."""
        self._pending.clear()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def __repr__(self) -> str:
        subs = sum(len(h) for h in self._subscribers.values())
        return f"<EventQueue pending={self.pending_count} subscribers={subs}>"


#: Shared instance.  Import this directly rather than constructing your own.
event_queue: EventQueue = EventQueue()
