from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from ..feed import personalize
from ..logging_setup import get_logger
from ..news import fetch_article_by_id, fetch_news_articles, search_news_articles
from ..schema import ArticlePage, Category, NewsArticle

logger = get_logger("concentribe.routes.news")

router = APIRouter(prefix="/api")

FEATURED_COUNT = 5


def split_csv(value: Optional[str]) -> List[str]:
    return [part.strip() for part in (value or "").split(",") if part.strip()]


@router.get("/news/featured", response_model=List[NewsArticle])
def featured():
    return fetch_news_articles("home", page=1, page_size=FEATURED_COUNT).articles


@router.get("/news/category/{category}", response_model=ArticlePage)
def by_category(
    category: Category,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    return fetch_news_articles(category, page=page, page_size=limit)


@router.get("/news/personalized", response_model=ArticlePage)
def personalized(
    interests: Optional[str] = None,
    sources: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
):
    """Home feed narrowed by comma-separated interests and sources."""
    wanted_interests, wanted_sources = split_csv(interests), split_csv(sources)
    if not wanted_interests and not wanted_sources:
        return fetch_news_articles("home", page=page, page_size=limit)

    # Over-fetch so filtering still leaves a full page most of the time
    upstream = fetch_news_articles("home", page=page, page_size=limit * 2)
    articles, has_more = personalize(upstream.articles, wanted_interests, wanted_sources, limit, upstream.has_more)
    logger.info(f"PERSONALIZED: {len(articles)}/{len(upstream.articles)} matched")
    return ArticlePage(articles=articles, has_more=has_more)


@router.get("/news/article/{article_id:path}", response_model=NewsArticle)
def article(article_id: str):
    if not article_id.strip():
        raise HTTPException(status_code=400, detail="Article ID is required")
    found = fetch_article_by_id(article_id)
    if found is None:
        raise HTTPException(status_code=404, detail="Article not found")
    return found


@router.get("/search", response_model=ArticlePage)
def search(
    q: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Search query is required")
    return search_news_articles(q.strip(), page=page, page_size=limit)
