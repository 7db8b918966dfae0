# concentribe/badges.py
"""
Badge catalog, awarding, and the event handlers that award badges.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Set

from sqlalchemy import func
from sqlmodel import Session, select

from .events import EventBus, FocusSessionCompleted, PuzzleSolved, StreakMilestone
from .logging_setup import get_logger
from .models import Badge, GameProgress, UserBadge, as_utc
from .schema import BadgeOut
from .store import get_session

logger = get_logger("concentribe.badges")

PUZZLE_MASTER_GAMES = 10

CATALOG = [
    {
        "badge_id": "focus-champion",
        "title": "Focus Champion",
        "icon": "military_tech",
        "background_color": "#fbbc04",
        "description": "Completed 5 focus sessions without interruption",
    },
    {
        "badge_id": "news-explorer",
        "title": "News Explorer",
        "icon": "explore",
        "background_color": "#1a73e8",
        "description": "Read articles from 10 different categories",
    },
    {
        "badge_id": "daily-streak",
        "title": "Daily Streak",
        "icon": "local_fire_department",
        "background_color": "#34a853",
        "description": "Visited the site for 7 consecutive days",
    },
    {
        "badge_id": "puzzle-master",
        "title": "Puzzle Master",
        "icon": "extension",
        "background_color": "#9c27b0",
        "description": "Completed 10 mind games successfully",
    },
]


def seed_badges(session: Session) -> None:
    for entry in CATALOG:
        if not session.exec(select(Badge).where(Badge.badge_id == entry["badge_id"])).first():
            session.add(Badge(**entry))


def badge_out(badge: Badge, earned_at: Optional[datetime] = None) -> BadgeOut:
    return BadgeOut(
        id=badge.badge_id,
        title=badge.title,
        icon=badge.icon,
        background_color=badge.background_color,
        description=badge.description,
        date_earned=as_utc(earned_at).isoformat() if earned_at else None,
    )


def all_badges(session: Session) -> List[BadgeOut]:
    return [badge_out(b) for b in session.exec(select(Badge).order_by(Badge.id)).all()]


def user_badges(session: Session, user_id: int) -> List[BadgeOut]:
    rows = session.exec(
        select(Badge, UserBadge)
        .where(UserBadge.badge_id == Badge.id, UserBadge.user_id == user_id)
        .order_by(UserBadge.awarded_at)
    ).all()
    return [badge_out(b, ub.awarded_at) for b, ub in rows]


def earned_badge_ids(session: Session, user_id: int) -> Set[str]:
    return {b.id for b in user_badges(session, user_id)}


def award_badge(session: Session, user_id: int, badge_id: str) -> bool:
    """
    Give `badge_id` to the user. Returns False when they already hold it.
    Unknown badge ids raise KeyError. Caller commits.
    """
    badge = session.exec(select(Badge).where(Badge.badge_id == badge_id)).first()
    if badge is None:
        raise KeyError(badge_id)
    held = session.exec(
        select(UserBadge).where(UserBadge.user_id == user_id, UserBadge.badge_id == badge.id)
    ).first()
    if held:
        return False
    session.add(UserBadge(user_id=user_id, badge_id=badge.id))
    logger.info(f"BADGE_AWARDED {badge_id}", extra={"user_id": user_id})
    return True


def _award_and_commit(user_id: int, badge_id: str) -> None:
    with get_session() as s:
        if award_badge(s, user_id, badge_id):
            s.commit()


def on_streak_milestone(event: StreakMilestone) -> None:
    _award_and_commit(event.user_id, "daily-streak")


def on_focus_session_completed(event: FocusSessionCompleted) -> None:
    _award_and_commit(event.user_id, "focus-champion")


def on_puzzle_solved(event: PuzzleSolved) -> None:
    with get_session() as s:
        completed = s.exec(
            select(func.count()).select_from(GameProgress).where(
                GameProgress.user_id == event.user_id, GameProgress.completed == True  # noqa: E712
            )
        ).one()
    if completed >= PUZZLE_MASTER_GAMES:
        _award_and_commit(event.user_id, "puzzle-master")


def register_badge_handlers(bus: EventBus) -> None:
    bus.subscribe(StreakMilestone, on_streak_milestone)
    bus.subscribe(FocusSessionCompleted, on_focus_session_completed)
    bus.subscribe(PuzzleSolved, on_puzzle_solved)


def dispatch_awards(bus: EventBus, user_id: int) -> List[str]:
    """Dispatch queued events; returns the badge ids this user gained from them."""
    with get_session() as s:
        before = earned_badge_ids(s, user_id)
    bus.dispatch()
    with get_session() as s:
        after = earned_badge_ids(s, user_id)
    return sorted(after - before)
