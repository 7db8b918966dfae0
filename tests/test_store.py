# tests/test_store.py
from datetime import datetime, timedelta, timezone

from sqlmodel import select
from concentribe.store import get_session, init_db
from concentribe.models import Badge, Community, User, as_utc, utcnow
from concentribe.accounts import hash_password, load_preferences, verify_password
from concentribe.seed import seed_demo_data

def test_init_db_seeds_once():
    init_db()  # second call must not duplicate anything
    with get_session() as s:
        assert seed_demo_data(s) is False
        assert len(s.exec(select(Badge)).all()) == 4
        assert len(s.exec(select(Community)).all()) == 10

def test_demo_user_seeded():
    with get_session() as s:
        demo = s.exec(select(User).where(User.username == "demo")).first()
        assert demo is not None and demo.id == 1
        assert verify_password("password", demo.password)
        prefs = load_preferences(demo)
        assert prefs.interests == ["technology", "health", "business"]
        assert prefs.focus_duration == 20

def test_user_roundtrip():
    with get_session() as s:
        u = User(username="roundtrip", password="x.y")
        s.add(u); s.commit(); s.refresh(u)
        got = s.exec(select(User).where(User.id == u.id)).first()
        assert got and got.username == "roundtrip"
        assert got.preferences_json == "{}"

def test_password_hashing():
    stored = hash_password("s3cret-pass")
    assert stored != "s3cret-pass"
    assert hash_password("s3cret-pass") != stored  # salted
    assert verify_password("s3cret-pass", stored)
    assert not verify_password("wrong-pass", stored)
    assert not verify_password("s3cret-pass", "")
    assert not verify_password("s3cret-pass", "x.y")

def test_timestamps_are_utc_aware():
    assert utcnow().tzinfo is timezone.utc
    # naive values come back from SQLite and were stored as UTC
    assert as_utc(datetime(2025, 1, 1, 12, 0)).isoformat() == "2025-01-01T12:00:00+00:00"
    eastern = datetime(2025, 1, 1, 7, 0, tzinfo=timezone(timedelta(hours=-5)))
    assert as_utc(eastern).isoformat() == "2025-01-01T12:00:00+00:00"
