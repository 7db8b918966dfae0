from typing import List

from fastapi import APIRouter, HTTPException, Request

from ..accounts import current_user_id
from ..bookmarks import add_bookmark, list_bookmarks, remove_bookmark, resolve_article, toggle_bookmark
from ..logging_setup import get_logger
from ..schema import BookmarkIn, BookmarkToggleOut, NewsArticle
from ..store import get_session

logger = get_logger("concentribe.routes.bookmarks")

router = APIRouter(prefix="/api/bookmarks")


def _article_id(body: BookmarkIn) -> str:
    if not body.article_id or not body.article_id.strip():
        raise HTTPException(status_code=400, detail="Article ID is required")
    return body.article_id.strip()


@router.get("", response_model=List[NewsArticle])
def bookmarks(request: Request):
    with get_session() as s:
        return list_bookmarks(s, current_user_id(request))


@router.post("", response_model=BookmarkToggleOut, status_code=201)
def add(body: BookmarkIn, request: Request):
    article_id = _article_id(body)
    user_id = current_user_id(request)
    with get_session() as s:
        article = resolve_article(s, article_id)
        if article is None:
            raise HTTPException(status_code=404, detail="Article not found")
        if add_bookmark(s, user_id, article):
            logger.info("BOOKMARK_ADDED", extra={"user_id": user_id, "article_id": article_id})
        s.commit()
    return BookmarkToggleOut(bookmarked=True)


@router.post("/toggle", response_model=BookmarkToggleOut)
def toggle(body: BookmarkIn, request: Request):
    article_id = _article_id(body)
    user_id = current_user_id(request)
    with get_session() as s:
        article = resolve_article(s, article_id)
        if article is None:
            raise HTTPException(status_code=404, detail="Article not found")
        bookmarked = toggle_bookmark(s, user_id, article)
        s.commit()
    return BookmarkToggleOut(bookmarked=bookmarked)


@router.delete("/{article_id:path}", response_model=BookmarkToggleOut)
def delete(article_id: str, request: Request):
    with get_session() as s:
        removed = remove_bookmark(s, current_user_id(request), article_id)
        s.commit()
    if not removed:
        raise HTTPException(status_code=404, detail="Bookmark not found")
    return BookmarkToggleOut(bookmarked=False)
