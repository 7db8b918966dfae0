# tests/test_feed.py
import random

from concentribe.feed import (
    FEED_CATEGORIES, article_insights, balanced_bundle, dedupe, homepage_insights, matches_filters, personalize,
)
from concentribe.insights import catalog
from concentribe.schema import Insight, NewsArticle, SourceRef

def _article(i, title="Headline", category="technology", source="Reuters", description=""):
    return NewsArticle(
        id=f"a{i}", title=title, description=description, url=f"https://example.com/{i}",
        published_at="2025-01-01T00:00:00Z", source=SourceRef(name=source), category=category,
    )

def _insight(i, kind):
    return Insight(id=f"i{i}", type=kind, title="t", content="c", category="technology")

def test_dedupe_keeps_first():
    a, b = _article(1, title="first"), _article(1, title="second")
    assert [x.title for x in dedupe([a, b, _article(2)])] == ["first", "Headline"]

def test_filters_match_category_title_and_source():
    art = _article(1, title="New vaccine results", category="general", source="BBC News")
    assert matches_filters(art, ["health", "vaccine"], [])
    assert matches_filters(art, [], ["bbc"])
    assert not matches_filters(art, ["sports"], [])
    assert not matches_filters(art, ["vaccine"], ["cnn"])
    assert matches_filters(art, [], [])

def test_personalize_limits_and_reports_more():
    pool = [_article(i, category="technology") for i in range(5)] + [_article(9, category="sports")]
    page, has_more = personalize(pool, ["technology"], [], limit=3)
    assert [a.id for a in page] == ["a0", "a1", "a2"]
    assert has_more

    page, has_more = personalize(pool, ["sports"], [], limit=3)
    assert [a.id for a in page] == ["a9"] and not has_more

def test_personalize_exact_page_defers_to_upstream():
    pool = [_article(i, category="technology") for i in range(3)] + [_article(9, category="sports")]
    page, has_more = personalize(pool, ["technology"], [], limit=3)
    assert len(page) == 3 and not has_more

    page, has_more = personalize(pool, ["technology"], [], limit=3, upstream_has_more=True)
    assert len(page) == 3 and has_more

def test_bundle_respects_quotas():
    pool = [_insight(i, k) for i, k in enumerate(["trend"] * 5 + ["analysis"] * 3 + ["factCheck"] * 3)]
    bundle = balanced_bundle(pool, rng=random.Random(1))
    kinds = [i.type for i in bundle]
    assert kinds.count("trend") == 2 and kinds.count("analysis") == 1 and kinds.count("factCheck") == 1

def test_bundle_prefers_unseen():
    pool = [_insight(i, "trend") for i in range(4)] + [_insight(10, "analysis"), _insight(11, "factCheck")]
    bundle = balanced_bundle(pool, previous=["i0", "i1"])
    assert {i.id for i in bundle if i.type == "trend"} == {"i2", "i3"}

def test_small_bundle_is_padded():
    pool = [_insight(i, "trend") for i in range(6)]
    bundle = balanced_bundle(pool)
    assert len(bundle) == 5
    assert len({i.id for i in bundle}) == 5

def test_homepage_has_one_per_category():
    picked = homepage_insights(catalog(), rng=random.Random(7))
    assert sorted(i.category for i in picked) == sorted(FEED_CATEGORIES)

def test_article_insights_point_at_article():
    out = article_insights(catalog(), "health", "abc")
    assert out and all(i.related_articles == ["abc"] for i in out)
    assert all(i.category == "health" for i in out)

def test_article_insights_unknown_category_uses_analysis():
    out = article_insights(catalog(), "india", "abc")
    assert out and all(i.type == "analysis" for i in out)
