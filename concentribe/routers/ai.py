import random
from typing import List, Optional

from fastapi import APIRouter, HTTPException

from ..analysis import (
    InsightGenerationError,
    analyze_article,
    fact_check_claim,
    generate_news_insights,
    llm_available,
    summarize_text,
)
from ..feed import FEED_CATEGORIES, article_insights, balanced_bundle, homepage_insights
from ..insights import catalog
from ..logging_setup import get_logger
from ..news import fetch_article_by_id, fetch_news_articles
from ..schema import (
    AnalysisOut,
    AnalyzeIn,
    FactCheckIn,
    FactCheckOut,
    Insight,
    SummarizeIn,
    SummaryOut,
)
from .news import split_csv

logger = get_logger("concentribe.routes.ai")

router = APIRouter(prefix="/api/ai")


def _live_homepage_insights() -> List[Insight]:
    top = {}
    for category in FEED_CATEGORIES:
        page = fetch_news_articles(category, page=1, page_size=1)
        top[category] = page.articles[0] if page.articles else None
    return generate_news_insights(top)


@router.get("/insights", response_model=List[Insight])
def homepage(exclude: Optional[str] = None):
    """
    Insights for the home page. With `exclude` (ids shown last time) a fresh
    balanced bundle is drawn from the catalog, preferring unseen items.
    """
    if exclude is not None:
        return balanced_bundle(catalog(), previous=split_csv(exclude), rng=random.Random())

    if llm_available():
        try:
            return _live_homepage_insights()
        except InsightGenerationError as e:
            logger.warning(f"INSIGHTS_FALLBACK: {e}")
    return homepage_insights(catalog())


@router.get("/insights/{article_id:path}", response_model=List[Insight])
def for_article(article_id: str):
    if not article_id.strip():
        raise HTTPException(status_code=400, detail="Article ID is required")

    article = fetch_article_by_id(article_id)
    if article is not None and llm_available():
        try:
            return generate_news_insights({article.category: article})
        except InsightGenerationError as e:
            logger.warning(f"ARTICLE_INSIGHTS_FALLBACK: {e}", extra={"article_id": article_id})
    return article_insights(catalog(), article.category if article else None, article_id)


@router.post("/analyze", response_model=AnalysisOut)
def analyze(body: AnalyzeIn):
    if not body.content or not body.content.strip():
        raise HTTPException(status_code=400, detail="Content is required")
    return analyze_article(body.content)


@router.post("/summarize", response_model=SummaryOut)
def summarize(body: SummarizeIn):
    if not body.text or not body.text.strip():
        raise HTTPException(status_code=400, detail="Text content is required")
    return SummaryOut(summary=summarize_text(body.text, body.max_length))


@router.post("/factcheck", response_model=FactCheckOut)
def factcheck(body: FactCheckIn):
    if not body.claim or not body.claim.strip():
        raise HTTPException(status_code=400, detail="Claim is required")
    return fact_check_claim(body.claim)
