# concentribe/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List

from fastapi import Depends, Request

from .events import EventBus


@dataclass
class AppContext:
    """Process-wide settings handed to routes instead of module globals.

    Holds no event queue itself: every request gets its own EventBus with
    `subscribers` registered on it, so one caller's queued events are never
    dispatched (or dropped) on another caller's behalf.
    """
    timezone: str = "UTC"
    subscribers: List[Callable[[EventBus], None]] = field(default_factory=list)

    def event_bus(self) -> EventBus:
        bus = EventBus()
        for register in self.subscribers:
            register(bus)
        return bus


def build_context(timezone: str) -> AppContext:
    from .badges import register_badge_handlers

    return AppContext(timezone=timezone, subscribers=[register_badge_handlers])


def get_context(request: Request) -> AppContext:
    return request.app.state.ctx


def get_event_bus(ctx: AppContext = Depends(get_context)) -> EventBus:
    return ctx.event_bus()
