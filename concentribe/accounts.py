# concentribe/accounts.py
"""
User accounts: password hashing, preference (de)serialization and the
session-cookie identity of the caller.
"""
from __future__ import annotations

import json
from typing import Optional

from fastapi import Request
from pydantic import ValidationError
from sqlmodel import Session, select
from werkzeug.security import check_password_hash, generate_password_hash

from .config import DEMO_USER_ID
from .logging_setup import get_logger
from .models import User
from .schema import PreferencesIn, UserOut, UserPreferences

logger = get_logger("concentribe.accounts")

SESSION_USER_KEY = "user_id"


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, stored: str) -> bool:
    if not stored:
        return False
    try:
        return check_password_hash(stored, password)
    except ValueError:
        # Unknown hash method or malformed value
        return False


# ---------- Preferences ----------

def load_preferences(user: User) -> UserPreferences:
    try:
        return UserPreferences.model_validate(json.loads(user.preferences_json or "{}"))
    except (ValueError, ValidationError):
        logger.warning("PREFERENCES_UNREADABLE", extra={"user_id": user.id})
        return UserPreferences()


def save_preferences(user: User, prefs: UserPreferences) -> None:
    user.preferences_json = prefs.model_dump_json(by_alias=True)


def merge_preferences(current: UserPreferences, update: PreferencesIn) -> UserPreferences:
    changes = update.model_dump(exclude_none=True)
    return current.model_copy(update=changes)


def user_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        username=user.username,
        email=user.email,
        name=user.name,
        avatar=user.avatar or "",
        bio=user.bio or "",
        preferences=load_preferences(user),
        streaks=user.streaks,
        last_visit=user.last_visit,
        google_id=user.google_id,
    )


# ---------- Lookups ----------

def find_by_username(session: Session, username: str) -> Optional[User]:
    return session.exec(select(User).where(User.username == username)).first()


def find_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(select(User).where(User.email == email)).first()


def unique_username(session: Session, base: str) -> str:
    base = "".join(ch for ch in base.lower() if ch.isalnum() or ch in "._-") or "user"
    candidate, n = base, 1
    while find_by_username(session, candidate):
        n += 1
        candidate = f"{base}{n}"
    return candidate


# ---------- Caller identity ----------

def session_user_id(request: Request) -> Optional[int]:
    """The logged-in user's id from the session cookie, or None."""
    value = request.session.get(SESSION_USER_KEY)
    return int(value) if value is not None else None


def current_user_id(request: Request) -> int:
    """Logged-in user, or the seeded demo user for anonymous callers."""
    uid = session_user_id(request)
    return uid if uid is not None else DEMO_USER_ID


def login_session(request: Request, user: User) -> None:
    request.session[SESSION_USER_KEY] = user.id


def logout_session(request: Request) -> None:
    request.session.pop(SESSION_USER_KEY, None)
