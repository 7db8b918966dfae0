# tests/test_events_badges.py
from concentribe.badges import award_badge, dispatch_awards, earned_badge_ids, register_badge_handlers
from concentribe.context import build_context
from concentribe.events import EventBus, FocusSessionCompleted, PuzzleSolved, StreakMilestone
from concentribe.games import default_games, record_completion, store_game
from concentribe.models import User
from concentribe.store import get_session

import pytest

def _user(name):
    with get_session() as s:
        u = User(username=name, password="x.y")
        s.add(u); s.commit(); s.refresh(u)
        return u.id

def test_emit_queues_until_dispatch():
    bus, seen = EventBus(), []
    bus.subscribe(StreakMilestone, seen.append)
    bus.emit(StreakMilestone(user_id=1, streak=7))
    assert seen == [] and bus.pending() == 1
    assert bus.dispatch() == 1
    assert seen == [StreakMilestone(user_id=1, streak=7)]
    assert bus.pending() == 0

def test_events_emitted_by_handlers_are_dispatched():
    bus, seen = EventBus(), []
    bus.subscribe(StreakMilestone, lambda e: bus.emit(FocusSessionCompleted(e.user_id, 20)))
    bus.subscribe(FocusSessionCompleted, seen.append)
    bus.emit(StreakMilestone(user_id=3, streak=7))
    assert bus.dispatch() == 2
    assert seen == [FocusSessionCompleted(3, 20)]

def test_award_badge_once():
    uid = _user("badge_once")
    with get_session() as s:
        assert award_badge(s, uid, "news-explorer") is True
        s.commit()
        assert award_badge(s, uid, "news-explorer") is False
        with pytest.raises(KeyError):
            award_badge(s, uid, "nope")

def test_dispatch_awards_reports_new_badges():
    uid = _user("badge_focus")
    bus = EventBus()
    register_badge_handlers(bus)
    bus.emit(FocusSessionCompleted(user_id=uid, duration_minutes=25))
    assert dispatch_awards(bus, uid) == ["focus-champion"]

    bus.emit(FocusSessionCompleted(user_id=uid, duration_minutes=25))
    assert dispatch_awards(bus, uid) == []

def test_puzzle_master_after_ten_completions():
    uid = _user("badge_puzzles")
    bus = EventBus()
    register_badge_handlers(bus)
    with get_session() as s:
        game = store_game(s, default_games()[0])
        s.commit()
        game_id = game.id
        for _ in range(9):
            record_completion(s, uid, game_id)
        s.commit()

    bus.emit(PuzzleSolved(user_id=uid, game_id=game_id, kind="riddle"))
    assert dispatch_awards(bus, uid) == []

    with get_session() as s:
        record_completion(s, uid, game_id)
        s.commit()
    bus.emit(PuzzleSolved(user_id=uid, game_id=game_id, kind="riddle"))
    assert dispatch_awards(bus, uid) == ["puzzle-master"]
    with get_session() as s:
        assert "puzzle-master" in earned_badge_ids(s, uid)

def test_each_request_bus_dispatches_only_its_own_events():
    ctx = build_context("UTC")
    first, second = _user("bus_first"), _user("bus_second")
    bus_a, bus_b = ctx.event_bus(), ctx.event_bus()
    assert bus_a is not bus_b

    bus_a.emit(FocusSessionCompleted(user_id=first, duration_minutes=25))
    # Dispatching someone else's request must not drain the first caller's queue
    assert dispatch_awards(bus_b, second) == []
    assert bus_a.pending() == 1
    assert dispatch_awards(bus_a, first) == ["focus-champion"]
    with get_session() as s:
        assert "focus-champion" not in earned_badge_ids(s, second)
