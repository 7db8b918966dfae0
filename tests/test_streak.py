# tests/test_streak.py
from datetime import date, timedelta

from freezegun import freeze_time

from concentribe.events import StreakMilestone
from concentribe.streak import StreakState, record_visit, today_in

TODAY = date(2025, 3, 10)

def test_first_visit_starts_at_one():
    state, events = record_visit(5, StreakState(), TODAY)
    assert state == StreakState(1, TODAY) and events == []

def test_same_day_is_a_no_op():
    state = StreakState(4, TODAY)
    assert record_visit(5, state, TODAY) == (state, [])

def test_consecutive_day_extends():
    state, events = record_visit(5, StreakState(2, TODAY - timedelta(days=1)), TODAY)
    assert state.streak == 3 and events == []

def test_gap_resets():
    state, _ = record_visit(5, StreakState(9, TODAY - timedelta(days=2)), TODAY)
    assert state == StreakState(1, TODAY)

def test_seventh_day_emits_milestone():
    _, events = record_visit(5, StreakState(6, TODAY - timedelta(days=1)), TODAY)
    assert events == [StreakMilestone(user_id=5, streak=7)]
    _, events = record_visit(5, StreakState(13, TODAY - timedelta(days=1)), TODAY)
    assert events == [StreakMilestone(user_id=5, streak=14)]

def test_today_uses_configured_timezone():
    # 02:00 UTC is still the previous evening in New York
    with freeze_time("2025-03-10 02:00:00"):
        assert today_in("America/New_York") == date(2025, 3, 9)
        assert today_in("UTC") == date(2025, 3, 10)

def test_week_of_visits_awards_daily_streak(client, register):
    # the session cookie is timestamped, so sign up inside the frozen clock too
    with freeze_time("2025-03-01 14:00:00"):
        register()
    for day in range(1, 8):
        with freeze_time(f"2025-03-{day:02d} 15:00:00"):
            r = client.post("/api/user/visit")
            assert r.status_code == 200
            body = r.json()
            assert body["streaks"] == day
            assert body["lastVisit"] == f"2025-03-{day:02d}"
            assert body["badgesAwarded"] == (["daily-streak"] if day == 7 else [])

    with freeze_time("2025-03-07 16:00:00"):
        badges = client.get("/api/badges/user").json()
    assert [b["id"] for b in badges] == ["daily-streak"]

def test_repeat_visit_same_day(client, register):
    with freeze_time("2025-04-01 15:00:00"):
        register()
        first = client.post("/api/user/visit").json()
        second = client.post("/api/user/visit").json()
    assert first["streaks"] == second["streaks"] == 1
