from __future__ import annotations

import unittest

from _testutil import ensure_repo_on_path

ensure_repo_on_path()

from systems.event_queue import Event, EventQueue, EventType  # noqa: E402


class TestEventQueue(unittest.TestCase):
    def setUp(self) -> None:
        self.queue = EventQueue()
        self.seen: list[str] = []

    def test_delivery_waits_for_flush(self) -> None:
        self.queue.subscribe(EventType.FOOD_EATEN, lambda e: self.seen.append(e.payload["cell"]))
        self.queue.post_event(EventType.FOOD_EATEN, {"cell": (1, 0, 0, 0)})
        self.assertEqual(self.seen, [])
        self.assertEqual(self.queue.pending_count, 1)

        self.queue.flush()
        self.assertEqual(self.seen, [(1, 0, 0, 0)])
        self.assertEqual(self.queue.pending_count, 0)

    def test_handlers_run_in_subscription_order(self) -> None:
        self.queue.subscribe(EventType.GAME_WON, lambda e: self.seen.append("first"))
        self.queue.subscribe(EventType.GAME_WON, lambda e: self.seen.append("second"))
        self.queue.post(Event(EventType.GAME_WON))
        self.queue.flush()
        self.assertEqual(self.seen, ["first", "second"])

    def test_duplicate_subscription_ignored(self) -> None:
        def handler(event: Event) -> None:
            self.seen.append("x")

        self.queue.subscribe(EventType.GAME_LOST, handler)
        self.queue.subscribe(EventType.GAME_LOST, handler)
        self.queue.post_event(EventType.GAME_LOST)
        self.queue.flush()
        self.assertEqual(self.seen, ["x"])

    def test_failing_handler_is_logged_and_others_still_run(self) -> None:
        def broken(event: Event) -> None:
            raise RuntimeError("boom")

        self.queue.subscribe(EventType.GHOST_MOVED, broken)
        self.queue.subscribe(EventType.GHOST_MOVED, lambda e: self.seen.append("ok"))
        self.queue.post_event(EventType.GHOST_MOVED)
        with self.assertLogs("systems.event_queue", level="ERROR"):
            self.queue.flush()
        self.assertEqual(self.seen, ["ok"])

    def test_events_posted_by_handlers_arrive_in_same_flush(self) -> None:
        def relay(event: Event) -> None:
            self.queue.post_event(EventType.GAME_WON, {"reason": "food"})

        self.queue.subscribe(EventType.FOOD_EATEN, relay)
        self.queue.subscribe(EventType.GAME_WON, lambda e: self.seen.append(e.payload["reason"]))
        self.queue.post_event(EventType.FOOD_EATEN)
        self.queue.flush()
        self.assertEqual(self.seen, ["food"])

    def test_unsubscribe(self) -> None:
        def handler(event: Event) -> None:
            self.seen.append("x")

        self.queue.subscribe(EventType.PLAYER_MOVED, handler)
        self.queue.subscribe(EventType.FOOD_EATEN, handler)
        self.queue.unsubscribe(EventType.PLAYER_MOVED, handler)
        self.queue.unsubscribe(EventType.GAME_WON, handler)
        self.queue.post_event(EventType.PLAYER_MOVED)
        self.queue.flush()
        self.assertEqual(self.seen, [])

        self.queue.unsubscribe_all(handler)
        self.queue.post_event(EventType.FOOD_EATEN)
        self.queue.flush()
        self.assertEqual(self.seen, [])

    def test_clear_drops_pending(self) -> None:
        self.queue.subscribe(EventType.QUIT_REQUESTED, lambda e: self.seen.append("quit"))
        self.queue.post_event(EventType.QUIT_REQUESTED)
        self.queue.clear()
        self.queue.flush()
        self.assertEqual(self.seen, [])


if __name__ == "__main__":
    unittest.main()
