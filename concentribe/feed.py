# concentribe/feed.py
"""
Feed assembly: personalization filters over article pages and the selection
of AI insight bundles shown next to the feed.
"""
from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .schema import Insight, NewsArticle

FEED_CATEGORIES = ["technology", "health", "business", "entertainment", "sports", "science"]

# Upper bound per insight type in one bundle
BUNDLE_QUOTAS = {"analysis": 1, "trend": 2, "factCheck": 1}
MIN_BUNDLE = 3
PADDED_BUNDLE = 5
HOMEPAGE_INSIGHTS = 5


def dedupe(articles: Iterable[NewsArticle]) -> List[NewsArticle]:
    seen: Set[str] = set()
    out: List[NewsArticle] = []
    for a in articles:
        if a.id in seen:
            continue
        seen.add(a.id)
        out.append(a)
    return out


def matches_filters(article: NewsArticle, interests: Sequence[str], sources: Sequence[str]) -> bool:
    """
    Interest keywords are looked up in category, title and description; source
    keywords in the source name. Either list matches on any keyword; both lists
    must match. An empty list matches everything.
    """
    if interests:
        haystack = " ".join([article.category or "", article.title or "", article.description or ""]).lower()
        if not any(i.lower() in haystack for i in interests):
            return False
    if sources:
        source_name = (article.source.name or "").lower()
        if not any(s.lower() in source_name for s in sources):
            return False
    return True


def personalize(
    pool: Iterable[NewsArticle],
    interests: Sequence[str],
    sources: Sequence[str],
    limit: int,
    upstream_has_more: bool = False,
) -> Tuple[List[NewsArticle], bool]:
    matched = [a for a in dedupe(pool) if matches_filters(a, interests, sources)]
    page = matched[:limit]
    has_more = len(matched) > limit or (upstream_has_more and len(page) == limit)
    return page, has_more


# ---------- Insight bundles ----------

def _prefer_unseen(items: List[Insight], previous: Optional[Set[str]]) -> List[Insight]:
    if not previous:
        return items
    return [i for i in items if i.id not in previous] + [i for i in items if i.id in previous]


def balanced_bundle(
    candidates: Sequence[Insight],
    previous: Optional[Iterable[str]] = None,
    rng: Optional[random.Random] = None,
) -> List[Insight]:
    """
    Pick a mixed set of insights: at most one analysis, two trends and one
    fact check. A bundle that ends up with fewer than three items is padded
    to five from the rest of the pool.

    `previous` holds the ids shown last time; those are used only once the
    unseen ones run out. `rng` shuffles each bucket; without it pool order is kept.
    """
    seen = set(previous) if previous is not None else None
    bundle: List[Insight] = []
    for kind, quota in BUNDLE_QUOTAS.items():
        bucket = [c for c in candidates if c.type == kind]
        if rng is not None:
            rng.shuffle(bucket)
        bundle.extend(_prefer_unseen(bucket, seen)[:quota])

    if len(bundle) < MIN_BUNDLE:
        chosen = {i.id for i in bundle}
        rest = [c for c in candidates if c.id not in chosen]
        if rng is not None:
            rng.shuffle(rest)
        bundle.extend(_prefer_unseen(rest, seen)[: PADDED_BUNDLE - len(bundle)])

    return bundle


def homepage_insights(catalog: Sequence[Insight], rng: Optional[random.Random] = None) -> List[Insight]:
    """One random insight per feed category, topped up to five from the rest."""
    rng = rng or random.Random()
    picked: List[Insight] = []
    for category in FEED_CATEGORIES:
        options = [i for i in catalog if i.category == category]
        if options:
            picked.append(rng.choice(options))
    if len(picked) < HOMEPAGE_INSIGHTS:
        chosen = {i.id for i in picked}
        rest = [i for i in catalog if i.id not in chosen]
        rng.shuffle(rest)
        picked.extend(rest[: HOMEPAGE_INSIGHTS - len(picked)])
    return picked


def article_insights(catalog: Sequence[Insight], category: Optional[str], article_id: str) -> List[Insight]:
    pool = [i for i in catalog if category and i.category == category]
    if not pool:
        pool = [i for i in catalog if i.type == "analysis"]
    if not pool:
        pool = list(catalog[:3])
    return [
        i.model_copy(update={"related_articles": [article_id]})
        for i in balanced_bundle(pool)
    ]
