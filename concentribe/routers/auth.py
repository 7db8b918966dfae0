"""
Accounts: username/password registration and login, Google sign-in, the
current user's profile, preferences and daily visit streak.
"""
import secrets
from typing import Optional
from urllib.parse import urlencode

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from sqlmodel import Session, select

from ..accounts import (
    current_user_id,
    find_by_email,
    find_by_username,
    hash_password,
    load_preferences,
    login_session,
    logout_session,
    merge_preferences,
    save_preferences,
    session_user_id,
    unique_username,
    user_out,
    verify_password,
)
from ..badges import dispatch_awards
from ..config import GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET, GOOGLE_REDIRECT_URI, REQUESTS_TIMEOUT
from ..context import AppContext, get_context, get_event_bus
from ..events import EventBus
from ..logging_setup import get_logger
from ..models import User
from ..schema import LoginIn, PreferencesIn, RegisterIn, UserOut, VisitOut
from ..store import get_session
from ..streak import StreakState, record_visit, today_in

logger = get_logger("concentribe.routes.auth")

router = APIRouter()

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"
OAUTH_STATE_KEY = "oauth_state"
LOGIN_FAILED_REDIRECT = "/auth?error=google_login_failed"


# ---------- Username / password ----------

@router.post("/api/register", response_model=UserOut, status_code=201)
def register(body: RegisterIn, request: Request):
    with get_session() as s:
        if find_by_username(s, body.username):
            raise HTTPException(status_code=400, detail="Username already exists")
        if body.email and find_by_email(s, body.email):
            raise HTTPException(status_code=400, detail="Email already exists")
        user = User(
            username=body.username,
            email=body.email,
            password=hash_password(body.password),
            name=body.name or body.username,
        )
        s.add(user)
        s.commit()
        s.refresh(user)
        login_session(request, user)
        logger.info("USER_REGISTERED", extra={"user_id": user.id})
        return user_out(user)


@router.post("/api/login", response_model=UserOut)
def login(body: LoginIn, request: Request):
    with get_session() as s:
        user = find_by_username(s, body.username)
        if user is None or not verify_password(body.password, user.password):
            raise HTTPException(status_code=401, detail="Invalid username or password")
        login_session(request, user)
        return user_out(user)


@router.post("/api/logout")
def logout(request: Request):
    logout_session(request)
    return {"message": "Logged out"}


@router.get("/api/user", response_model=UserOut)
def me(request: Request):
    uid = session_user_id(request)
    with get_session() as s:
        user = s.get(User, uid) if uid is not None else None
        if user is None:
            logout_session(request)
            raise HTTPException(status_code=401, detail="Not authenticated")
        return user_out(user)


def _load_user(s: Session, request: Request) -> User:
    user = s.get(User, current_user_id(request))
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/api/user/preferences", response_model=UserOut)
def update_preferences(body: PreferencesIn, request: Request):
    with get_session() as s:
        user = _load_user(s, request)
        save_preferences(user, merge_preferences(load_preferences(user), body))
        s.add(user)
        s.commit()
        s.refresh(user)
        return user_out(user)


@router.post("/api/user/visit", response_model=VisitOut)
def visit(
    request: Request,
    ctx: AppContext = Depends(get_context),
    events: EventBus = Depends(get_event_bus),
):
    """Count today's visit toward the daily streak (dates in the configured timezone)."""
    with get_session() as s:
        user = _load_user(s, request)
        user_id = user.id
        state, milestones = record_visit(
            user_id, StreakState(user.streaks or 0, user.last_visit), today_in(ctx.timezone)
        )
        user.streaks, user.last_visit = state.streak, state.last_visit
        s.add(user)
        s.commit()

    for event in milestones:
        events.emit(event)
    awarded = dispatch_awards(events, user_id)
    return VisitOut(streaks=state.streak, last_visit=state.last_visit, badges_awarded=awarded)


# ---------- Google OAuth ----------

def _require_google() -> None:
    if not GOOGLE_CLIENT_ID or not GOOGLE_CLIENT_SECRET:
        raise HTTPException(status_code=503, detail="Google login is not configured")


@router.get("/auth/google")
def google_login(request: Request):
    _require_google()
    state = secrets.token_urlsafe(16)
    request.session[OAUTH_STATE_KEY] = state
    params = {
        "client_id": GOOGLE_CLIENT_ID,
        "redirect_uri": GOOGLE_REDIRECT_URI,
        "response_type": "code",
        "scope": "openid email profile",
        "state": state,
        "prompt": "select_account",
    }
    return RedirectResponse(f"{GOOGLE_AUTH_URL}?{urlencode(params)}", status_code=302)


def _exchange_code(code: str) -> dict:
    with httpx.Client(timeout=REQUESTS_TIMEOUT) as client:
        token = client.post(GOOGLE_TOKEN_URL, data={
            "code": code,
            "client_id": GOOGLE_CLIENT_ID,
            "client_secret": GOOGLE_CLIENT_SECRET,
            "redirect_uri": GOOGLE_REDIRECT_URI,
            "grant_type": "authorization_code",
        })
        token.raise_for_status()
        access_token = token.json()["access_token"]
        info = client.get(GOOGLE_USERINFO_URL, headers={"Authorization": f"Bearer {access_token}"})
        info.raise_for_status()
        return info.json()


def link_google_account(s: Session, profile: dict) -> User:
    """Find the user by Google id, then by email (linking it), else create one. Caller commits."""
    google_id = str(profile["sub"])
    user = s.exec(select(User).where(User.google_id == google_id)).first()
    if user is not None:
        return user

    email = profile.get("email")
    user = find_by_email(s, email) if email else None
    if user is not None:
        user.google_id = google_id
        if not user.avatar and profile.get("picture"):
            user.avatar = profile["picture"]
        s.add(user)
        return user

    base = (email or "").split("@")[0] or profile.get("given_name") or "user"
    user = User(
        username=unique_username(s, base),
        email=email,
        # Google-only accounts get an unguessable password
        password=hash_password(secrets.token_urlsafe(32)),
        name=profile.get("name") or base,
        avatar=profile.get("picture") or "",
        google_id=google_id,
    )
    s.add(user)
    return user


@router.get("/auth/google/callback")
def google_callback(
    request: Request, code: Optional[str] = None, state: Optional[str] = None, error: Optional[str] = None
):
    _require_google()
    expected = request.session.pop(OAUTH_STATE_KEY, None)
    if error or not code or not state or state != expected:
        logger.warning("GOOGLE_LOGIN_REJECTED", extra={"error": error or "bad_state_or_code"})
        return RedirectResponse(LOGIN_FAILED_REDIRECT, status_code=302)

    try:
        profile = _exchange_code(code)
    except (httpx.HTTPError, KeyError, ValueError) as e:
        logger.warning(f"GOOGLE_LOGIN_FAILED: {type(e).__name__}")
        return RedirectResponse(LOGIN_FAILED_REDIRECT, status_code=302)
    if not profile.get("sub"):
        return RedirectResponse(LOGIN_FAILED_REDIRECT, status_code=302)

    with get_session() as s:
        user = link_google_account(s, profile)
        s.commit()
        s.refresh(user)
        login_session(request, user)
    return RedirectResponse("/", status_code=302)
