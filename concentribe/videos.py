# concentribe/videos.py
"""
YouTube Data API search for the focus-mode video rail.
Without a YOUTUBE_API_KEY, or when the API errors, every call returns [].
"""
from __future__ import annotations

import random
from typing import Dict, List, Optional, Sequence

import requests

from .config import REQUESTS_TIMEOUT, YOUTUBE_API_KEY, YOUTUBE_API_URL
from .logging_setup import get_logger
from .schema import Video

logger = get_logger("concentribe.videos")

DEFAULT_INTERESTS = ["technology", "health", "business", "science"]
RESULTS_PER_QUERY = 2


class YouTubeError(RuntimeError):
    pass


def _thumbnail(snippet: Dict) -> str:
    thumbs = snippet.get("thumbnails") or {}
    for size in ("high", "medium", "default"):
        url = (thumbs.get(size) or {}).get("url")
        if url:
            return url
    return ""


def _map_item(item: Dict) -> Optional[Video]:
    video_id = (item.get("id") or {}).get("videoId")
    if not video_id:
        return None
    snippet = item.get("snippet") or {}
    return Video(
        id=video_id,
        title=snippet.get("title") or "",
        description=snippet.get("description") or "",
        channel_title=snippet.get("channelTitle") or "",
        published_at=snippet.get("publishedAt") or "",
        thumbnail_url=_thumbnail(snippet),
        tags=list(snippet.get("tags") or []),
    )


def _search(query: str, max_results: int) -> List[Video]:
    if not YOUTUBE_API_KEY:
        raise YouTubeError("YOUTUBE_API_KEY is not configured")
    params = {
        "part": "snippet",
        "type": "video",
        "q": query,
        "maxResults": max_results,
        "key": YOUTUBE_API_KEY,
    }
    try:
        r = requests.get(f"{YOUTUBE_API_URL}/search", params=params, timeout=REQUESTS_TIMEOUT)
        r.raise_for_status()
        data = r.json()
    except (requests.RequestException, ValueError) as e:
        raise YouTubeError(f"search failed: {type(e).__name__}") from e
    return [v for v in (_map_item(it) for it in data.get("items") or []) if v is not None]


def search_videos(query: str, max_results: int = 10) -> List[Video]:
    try:
        return _search(query, max_results)
    except YouTubeError as e:
        logger.warning(f"YOUTUBE_SEARCH_FAILED: {e}", extra={"query": query})
        return []


def videos_by_category(category: str, max_results: int = 10) -> List[Video]:
    query = category if "news" in category.lower() else f"{category} news"
    return search_videos(query, max_results)


def _focus_queries(interests: Sequence[str], sources: Sequence[str]) -> List[str]:
    queries: List[str] = []
    for interest in interests:
        queries += [f"{interest} news", f"latest {interest} news", f"{interest} updates"]
        queries += [f"{interest} {source} news" for source in sources]
    return queries


def focus_mode_videos(
    interests: Optional[Sequence[str]] = None,
    sources: Optional[Sequence[str]] = None,
    max_results: int = 6,
    rng: Optional[random.Random] = None,
) -> List[Video]:
    """
    Videos for focus mode: a few results for several phrasings of each
    interest (and interest+source), then single words of the interests if that
    came up short. Deduplicated by video id, shuffled, cut to max_results.
    """
    interests = list(interests or DEFAULT_INTERESTS)
    sources = list(sources or [])
    rng = rng or random.Random()

    collected: Dict[str, Video] = {}

    def take(query: str) -> None:
        for v in search_videos(query, RESULTS_PER_QUERY):
            collected.setdefault(v.id, v)

    for query in _focus_queries(interests, sources):
        take(query)

    if len(collected) < max_results:
        words = {w for phrase in interests for w in phrase.split() if len(w) >= 3}
        for word in sorted(words):
            take(f"{word} news")
            if len(collected) >= max_results:
                break

    videos = list(collected.values())
    rng.shuffle(videos)
    return videos[:max_results]
