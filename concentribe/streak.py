# concentribe/streak.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

import pytz

from .events import StreakMilestone

MILESTONE_EVERY = 7


@dataclass(frozen=True)
class StreakState:
    streak: int = 0
    last_visit: Optional[date] = None


def today_in(tz_name: str) -> date:
    return datetime.now(pytz.timezone(tz_name)).date()


def record_visit(user_id: int, state: StreakState, today: date) -> Tuple[StreakState, List[object]]:
    """
    Advance the daily streak for a visit on `today`.

    Same-day visits change nothing. A visit the day after the last one extends
    the streak (every 7th day emits a StreakMilestone); any other gap, or no
    previous visit, starts over at 1.
    """
    if state.last_visit == today:
        return state, []

    if state.last_visit == today - timedelta(days=1):
        streak = state.streak + 1
        events: List[object] = []
        if streak % MILESTONE_EVERY == 0:
            events.append(StreakMilestone(user_id=user_id, streak=streak))
        return StreakState(streak, today), events

    return StreakState(1, today), []
