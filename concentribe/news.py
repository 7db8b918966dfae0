# concentribe/news.py
"""
News pipeline: NewsAPI fetches backed by the local article cache.

Live results are written through to the cache; whenever the upstream call
fails (no key, network error, bad status, empty result) the cache answers
instead. Nothing here raises on upstream trouble: failures are logged and the
caller gets whatever the cache holds, possibly an empty page.
"""

from __future__ import annotations

import base64
import binascii
import math
import re
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional
from urllib.parse import urlparse

import requests
from sqlmodel import Session, col, or_, select

from .config import NEWS_API_KEY, NEWS_API_URL, REQUESTS_TIMEOUT
from .logging_setup import get_logger
from .models import Article, as_utc, utcnow
from .schema import ArticlePage, NewsArticle, SourceRef
from .store import get_session

logger = get_logger("concentribe.news")

WORDS_PER_MINUTE = 200
_CHARS_MARKER = re.compile(r"\s*\[\+\d+ chars\]\s*$")


class NewsAPIError(RuntimeError):
    """Upstream call failed or returned nothing usable."""


# ---------- Identifiers & mapping ----------

def article_id_from_url(url: str) -> str:
    return base64.urlsafe_b64encode(url.encode("utf-8")).decode("ascii")


def url_from_article_id(article_id: str) -> Optional[str]:
    """Reverse of article_id_from_url; also accepts standard base64. None if it isn't an encoded URL."""
    if not article_id:
        return None
    padded = article_id + "=" * (-len(article_id) % 4)
    for decode in (base64.urlsafe_b64decode, base64.b64decode):
        try:
            url = decode(padded.encode("ascii")).decode("utf-8")
        except (binascii.Error, UnicodeError, ValueError):
            continue
        if url.startswith(("http://", "https://")):
            return url
    return None


def estimate_reading_time(text: Optional[str]) -> int:
    words = len((text or "").split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def _parse_published(value: Optional[str]) -> datetime:
    if value:
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
            return dt.astimezone(timezone.utc) if dt.tzinfo else dt.replace(tzinfo=timezone.utc)
        except ValueError:
            pass
    return datetime.now(timezone.utc)


def _iso(dt: datetime) -> str:
    return as_utc(dt).strftime("%Y-%m-%dT%H:%M:%SZ")


def _derive_description(title: str, description: str, content: str) -> str:
    if description and len(description) >= 10:
        return description
    if content and len(content) > 20:
        return _CHARS_MARKER.sub("", content[:150]).rstrip() + "..."
    return f"{title}. Read the full article for more details."


def map_newsapi_article(raw: Dict, category: str) -> NewsArticle:
    """Turn one NewsAPI article object into our article shape."""
    url = raw.get("url") or ""
    title = (raw.get("title") or "").strip() or "Untitled"
    content = raw.get("content") or ""
    description = _derive_description(title, (raw.get("description") or "").strip(), content)
    source = raw.get("source") or {}
    return NewsArticle(
        id=article_id_from_url(url),
        title=title,
        description=description,
        content=content or description,
        url=url,
        image=raw.get("urlToImage") or "",
        published_at=_iso(_parse_published(raw.get("publishedAt"))),
        source=SourceRef(id=source.get("id"), name=source.get("name") or ""),
        category=category,
        estimated_reading_time=estimate_reading_time(content or description),
    )


# ---------- Cache ----------

def row_to_article(row: Article) -> NewsArticle:
    return NewsArticle(
        id=row.api_id,
        title=row.title,
        description=row.description or "",
        content=row.content or "",
        url=row.url,
        image=row.image_url or "",
        published_at=_iso(row.published_at),
        source=SourceRef(id=row.source_id, name=row.source_name),
        category=row.category,
        estimated_reading_time=row.estimated_reading_time,
    )


def upsert_articles(session: Session, articles: Iterable[NewsArticle]) -> int:
    """Insert or refresh cached rows keyed by article id. Caller commits."""
    n = 0
    for a in articles:
        row = session.exec(select(Article).where(Article.api_id == a.id)).first() or Article(
            api_id=a.id, title=a.title, url=a.url, published_at=utcnow()
        )
        row.title = a.title
        row.description = a.description
        row.content = a.content
        row.url = a.url
        row.image_url = a.image
        row.published_at = _parse_published(a.published_at)
        row.source_id = a.source.id
        row.source_name = a.source.name
        row.category = a.category
        row.estimated_reading_time = a.estimated_reading_time
        session.add(row)
        n += 1
    return n


def cache_articles(articles: Iterable[NewsArticle]) -> int:
    with get_session() as s:
        n = upsert_articles(s, articles)
        s.commit()
    return n


def get_cached_article(article_id: str) -> Optional[NewsArticle]:
    with get_session() as s:
        row = s.exec(select(Article).where(Article.api_id == article_id)).first()
        return row_to_article(row) if row else None


def get_cached_row(session: Session, article_id: str) -> Optional[Article]:
    return session.exec(select(Article).where(Article.api_id == article_id)).first()


def cached_articles(category: str, page: int = 1, page_size: int = 10) -> List[NewsArticle]:
    """Newest first; 'home' means every category."""
    with get_session() as s:
        stmt = select(Article)
        if category != "home":
            stmt = stmt.where(Article.category == category)
        stmt = stmt.order_by(col(Article.published_at).desc()).offset((page - 1) * page_size).limit(page_size)
        return [row_to_article(r) for r in s.exec(stmt).all()]


def search_cached(query: str, page: int = 1, page_size: int = 10) -> List[NewsArticle]:
    pattern = f"%{query}%"
    with get_session() as s:
        stmt = (
            select(Article)
            .where(or_(
                col(Article.title).ilike(pattern),
                col(Article.description).ilike(pattern),
                col(Article.content).ilike(pattern),
            ))
            .order_by(col(Article.published_at).desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return [row_to_article(r) for r in s.exec(stmt).all()]


# ---------- Upstream ----------

def _newsapi_get(endpoint: str, params: Dict) -> Dict:
    if not NEWS_API_KEY:
        raise NewsAPIError("NEWS_API_KEY is not configured")
    try:
        r = requests.get(
            f"{NEWS_API_URL}/{endpoint}",
            params=params,
            headers={"X-Api-Key": NEWS_API_KEY},
            timeout=REQUESTS_TIMEOUT,
        )
    except requests.RequestException as e:
        raise NewsAPIError(f"{endpoint} request failed: {type(e).__name__}") from e
    if r.status_code != 200:
        raise NewsAPIError(f"{endpoint} returned HTTP {r.status_code}")
    try:
        data = r.json()
    except ValueError as e:
        raise NewsAPIError(f"{endpoint} returned a non-JSON body") from e
    if data.get("status") != "ok":
        raise NewsAPIError(data.get("message") or f"{endpoint} returned status {data.get('status')}")
    return data


def _mapped(data: Dict, category: str) -> List[NewsArticle]:
    # NewsAPI marks pulled stories with a "[Removed]" title and no URL
    return [
        map_newsapi_article(a, category)
        for a in data.get("articles") or []
        if a.get("url") and a.get("title") != "[Removed]"
    ]


def fetch_news_articles(category: str = "home", page: int = 1, page_size: int = 10) -> ArticlePage:
    params = {"country": "us", "page": page, "pageSize": page_size}
    if category != "home":
        params["category"] = category
    try:
        data = _newsapi_get("top-headlines", params)
        articles = _mapped(data, category)
        if not articles:
            raise NewsAPIError("top-headlines returned no articles")
    except NewsAPIError as e:
        logger.warning(
            f"NEWSAPI_FALLBACK: {e}",
            extra={"category": category, "page": page},
        )
        return ArticlePage(articles=cached_articles(category, page, page_size), has_more=False)

    cache_articles(articles)
    total = int(data.get("totalResults") or 0)
    return ArticlePage(articles=articles, has_more=total > page * page_size)


def search_news_articles(query: str, page: int = 1, page_size: int = 10) -> ArticlePage:
    params = {"q": query, "page": page, "pageSize": page_size, "language": "en", "sortBy": "relevancy"}
    try:
        data = _newsapi_get("everything", params)
    except NewsAPIError as e:
        logger.warning(f"NEWSAPI_SEARCH_FALLBACK: {e}", extra={"query": query})
        return ArticlePage(articles=search_cached(query, page, page_size), has_more=False)

    total = int(data.get("totalResults") or 0)
    return ArticlePage(articles=_mapped(data, "home"), has_more=total > page * page_size)


# ---------- Single article ----------

_DOMAIN_CATEGORIES = [
    (("tech", "wired"), "technology"),
    (("health",), "health"),
    (("sport",), "sports"),
    (("business", "finance"), "business"),
]


def guess_category(url: str) -> str:
    host = urlparse(url).netloc.lower()
    for keywords, category in _DOMAIN_CATEGORIES:
        if any(k in host for k in keywords):
            return category
    return "home"


def _title_from_url(url: str) -> str:
    segments = [s for s in urlparse(url).path.split("/") if s]
    if not segments:
        return ""
    slug = re.sub(r"\.\w+$", "", segments[-1])
    return slug.replace("-", " ").replace("_", " ").strip()


def _basic_article(article_id: str, url: str) -> NewsArticle:
    host = urlparse(url).netloc.lower()
    domain = host[4:] if host.startswith("www.") else host
    title = _title_from_url(url).capitalize() or f"Article from {domain}"
    description = f"{title}. Read the full article for more details."
    return NewsArticle(
        id=article_id,
        title=title,
        description=description,
        content=description,
        url=url,
        published_at=_iso(datetime.now(timezone.utc)),
        source=SourceRef(id=None, name=domain),
        category=guess_category(url),
        estimated_reading_time=1,
    )


def fetch_article_by_id(article_id: str) -> Optional[NewsArticle]:
    """
    Resolve one article: live lookup by its URL, then the cache, then a title
    search from the URL slug, then a minimal article built from the URL itself.
    Ids that don't decode to a URL and aren't cached give None.
    """
    url = url_from_article_id(article_id)

    if url:
        try:
            data = _newsapi_get("everything", {"q": url, "pageSize": 1})
            found = [a for a in _mapped(data, guess_category(url)) if a.url == url]
            if found:
                cache_articles(found[:1])
                return found[0]
        except NewsAPIError as e:
            logger.info(f"NEWSAPI_LOOKUP_MISS: {e}", extra={"article_id": article_id})

    cached = get_cached_article(article_id)
    if cached:
        return cached
    if not url:
        return None

    title_query = _title_from_url(url)
    if len(title_query) > 5:
        try:
            data = _newsapi_get("everything", {"q": title_query, "pageSize": 1, "sortBy": "relevancy"})
            found = _mapped(data, guess_category(url))
            if found:
                return found[0].model_copy(update={"id": article_id})
        except NewsAPIError as e:
            logger.info(f"NEWSAPI_TITLE_SEARCH_MISS: {e}", extra={"article_id": article_id})

    return _basic_article(article_id, url)
