# concentribe/events.py
"""
In-process event bus for state transitions that award badges.

emit() only queues the event. The route that caused the transition commits
first and then calls dispatch(), so handlers always see committed state.
"""
from __future__ import annotations

from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Callable, DefaultDict, Deque, List, Type

from .logging_setup import get_logger

logger = get_logger("concentribe.events")


@dataclass(frozen=True)
class StreakMilestone:
    user_id: int
    streak: int


@dataclass(frozen=True)
class FocusSessionCompleted:
    user_id: int
    duration_minutes: int


@dataclass(frozen=True)
class PuzzleSolved:
    user_id: int
    game_id: int
    kind: str


Handler = Callable[[object], None]


class EventBus:
    def __init__(self) -> None:
        self._handlers: DefaultDict[Type, List[Handler]] = defaultdict(list)
        self._queue: Deque[object] = deque()

    def subscribe(self, event_type: Type, handler: Handler) -> None:
        self._handlers[event_type].append(handler)

    def emit(self, event: object) -> None:
        self._queue.append(event)

    def pending(self) -> int:
        return len(self._queue)

    def dispatch(self) -> int:
        """Run handlers for every queued event, including ones they emit. Returns the count handled."""
        handled = 0
        while self._queue:
            event = self._queue.popleft()
            handlers = self._handlers.get(type(event), [])
            logger.debug(f"EVENT {type(event).__name__} -> {len(handlers)} handler(s)")
            for handler in handlers:
                handler(event)
            handled += 1
        return handled
