import random
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ..accounts import current_user_id, load_preferences
from ..badges import dispatch_awards
from ..context import get_event_bus
from ..events import EventBus, FocusSessionCompleted
from ..logging_setup import get_logger
from ..models import User
from ..news import fetch_news_articles
from ..schema import FocusSessionIn, FocusSessionOut, NewsArticle, Video
from ..store import get_session
from ..videos import focus_mode_videos, search_videos, videos_by_category
from .news import split_csv

logger = get_logger("concentribe.routes.focus")

router = APIRouter(prefix="/api")

FOCUS_CATEGORIES = ["technology", "health", "business", "science"]
FOCUS_PER_CATEGORY = 3


@router.get("/focus/articles", response_model=List[NewsArticle])
def focus_articles():
    articles: List[NewsArticle] = []
    for category in FOCUS_CATEGORIES:
        articles.extend(fetch_news_articles(category, page=1, page_size=FOCUS_PER_CATEGORY).articles)
    random.shuffle(articles)
    return articles


@router.get("/focus/videos", response_model=List[Video])
def focus_videos(
    request: Request,
    interests: Optional[str] = None,
    sources: Optional[str] = None,
    limit: int = Query(6, ge=1, le=25),
):
    """Videos for the given interests/sources, else the caller's saved preferences."""
    wanted_interests, wanted_sources = split_csv(interests), split_csv(sources)
    if not wanted_interests and not wanted_sources:
        with get_session() as s:
            user = s.get(User, current_user_id(request))
            if user is not None:
                prefs = load_preferences(user)
                wanted_interests, wanted_sources = list(prefs.interests), list(prefs.sources)
    return focus_mode_videos(wanted_interests, wanted_sources, limit)


@router.post("/focus/sessions", response_model=FocusSessionOut)
def finish_session(body: FocusSessionIn, request: Request, events: EventBus = Depends(get_event_bus)):
    user_id = current_user_id(request)
    if not body.completed:
        logger.info(f"FOCUS_SESSION_ABANDONED after {body.duration_minutes} min", extra={"user_id": user_id})
        return FocusSessionOut(completed=False)

    events.emit(FocusSessionCompleted(user_id=user_id, duration_minutes=body.duration_minutes))
    return FocusSessionOut(completed=True, badges_awarded=dispatch_awards(events, user_id))


@router.get("/youtube/search", response_model=List[Video])
def youtube_search(q: Optional[str] = None, limit: int = Query(10, ge=1, le=50)):
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Search query is required")
    return search_videos(q.strip(), limit)


@router.get("/youtube/category/{category}", response_model=List[Video])
def youtube_category(category: str, limit: int = Query(10, ge=1, le=50)):
    return videos_by_category(category, limit)
