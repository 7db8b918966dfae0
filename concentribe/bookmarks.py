# concentribe/bookmarks.py
from __future__ import annotations

from typing import List, Optional

from sqlmodel import Session, col, select

from .models import Article, Bookmark
from .news import row_to_article, fetch_article_by_id, get_cached_row, upsert_articles
from .schema import NewsArticle


def resolve_article(session: Session, article_id: str) -> Optional[Article]:
    """Cached row for the article, fetching and caching it first if needed. Caller commits."""
    row = get_cached_row(session, article_id)
    if row is not None:
        return row
    article = fetch_article_by_id(article_id)
    if article is None:
        return None
    # Lookups can come back under a different id; store under the one asked for
    upsert_articles(session, [article.model_copy(update={"id": article_id})])
    session.flush()
    return get_cached_row(session, article_id)


def _find(session: Session, user_id: int, article_row_id: int) -> Optional[Bookmark]:
    return session.exec(
        select(Bookmark).where(Bookmark.user_id == user_id, Bookmark.article_id == article_row_id)
    ).first()


def list_bookmarks(session: Session, user_id: int) -> List[NewsArticle]:
    rows = session.exec(
        select(Article)
        .join(Bookmark, Bookmark.article_id == Article.id)
        .where(Bookmark.user_id == user_id)
        .order_by(col(Bookmark.created_at).desc())
    ).all()
    return [row_to_article(r) for r in rows]


def add_bookmark(session: Session, user_id: int, article: Article) -> bool:
    if _find(session, user_id, article.id):
        return False
    session.add(Bookmark(user_id=user_id, article_id=article.id))
    return True


def remove_bookmark(session: Session, user_id: int, article_id: str) -> bool:
    row = get_cached_row(session, article_id)
    bookmark = _find(session, user_id, row.id) if row else None
    if bookmark is None:
        return False
    session.delete(bookmark)
    return True


def toggle_bookmark(session: Session, user_id: int, article: Article) -> bool:
    """Flip the bookmark; returns the new state."""
    bookmark = _find(session, user_id, article.id)
    if bookmark is not None:
        session.delete(bookmark)
        return False
    session.add(Bookmark(user_id=user_id, article_id=article.id))
    return True
