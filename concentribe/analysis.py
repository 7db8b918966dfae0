# concentribe/analysis.py
"""
LLM-backed text services: summaries, article analysis, fact checks and
per-category trend insights.

Every public call works without an OpenAI key. When the client is missing or
the call fails, a local rule-based fallback answers instead (except
generate_news_insights, whose caller falls back to the static catalog).
"""
from __future__ import annotations

import json
import re
from typing import Dict, List, Optional

from .config import OPENAI_MODEL, client
from .logging_setup import get_logger
from .news import search_news_articles
from .schema import AnalysisOut, FactCheckOut, Insight, NewsArticle

logger = get_logger("concentribe.analysis")

MAX_PROMPT_CHARS = 6000

POSITIVE_WORDS = [
    "success", "growth", "positive", "improved", "gain", "recovery", "advance", "breakthrough",
    "progress", "achievement", "hope", "benefit", "efficient", "opportunity", "innovation",
    "solution", "resolved", "healthy", "good", "great",
]
NEGATIVE_WORDS = [
    "problem", "crisis", "decline", "loss", "negative", "failure", "weak", "poor", "disaster",
    "risk", "threat", "conflict", "danger", "deficit", "damage", "worsen", "struggle", "crash",
    "bad", "terrible",
]
TOPIC_WORDS = [
    "technology", "science", "health", "business", "finance", "politics", "climate", "education",
    "environment", "sports", "entertainment", "covid", "economy", "market", "medicine", "research",
    "government", "security", "energy", "war", "social media", "artificial intelligence",
]
DEFAULT_TOPICS = ["news", "current events"]
SENTIMENT_MARGIN = 2
MAX_TOPICS = 5

STOP_WORDS = {
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "with", "by", "about",
    "as", "is", "are", "was", "were", "be", "been", "being", "have", "has", "had", "do", "does",
    "did", "will", "would", "should", "can", "could",
}
MAX_CLAIM_KEYWORDS = 4

_SENTENCE_END = re.compile(r"(?<=[.!?])\s+")


class InsightGenerationError(RuntimeError):
    """The LLM produced no insight for any category."""


def llm_available() -> bool:
    return client is not None


def _truncate(s: str, max_chars: int = MAX_PROMPT_CHARS) -> str:
    return s[:max_chars] if s else s


def _first_sentences(text: str, n: int = 2) -> str:
    sentences = [s.strip() for s in _SENTENCE_END.split((text or "").strip()) if s.strip()]
    return " ".join(sentences[:n])


def _chat_json(system: str, user: str, temperature: float = 0.3) -> Dict:
    if client is None:
        raise RuntimeError("OpenAI client is not configured")
    resp = client.chat.completions.create(
        model=OPENAI_MODEL,
        temperature=temperature,
        response_format={"type": "json_object"},
        messages=[
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ],
    )
    return json.loads(resp.choices[0].message.content)


def _sentiment(value) -> str:
    value = str(value or "").lower()
    return value if value in ("positive", "negative", "neutral") else "neutral"


def _confidence(value, default: int = 70) -> int:
    try:
        return max(0, min(100, int(round(float(value)))))
    except (TypeError, ValueError):
        return default


# ---------- Summaries ----------

def fallback_summary(text: str, max_length: int = 200) -> str:
    summary = _first_sentences(text)
    if not summary:
        return "Unable to generate a summary."
    if len(summary) > max_length:
        summary = summary[:max_length].rstrip() + "..."
    return summary


def summarize_text(text: str, max_length: int = 200) -> str:
    if client is not None:
        try:
            resp = client.chat.completions.create(
                model=OPENAI_MODEL,
                temperature=0.5,
                max_tokens=150,
                messages=[
                    {"role": "system", "content": "You are a concise news summarizer. Stick to facts in the text."},
                    {"role": "user", "content": (
                        f"Summarize the following text in at most {max_length} characters:\n\n{_truncate(text)}"
                    )},
                ],
            )
            summary = (resp.choices[0].message.content or "").strip()
            if summary:
                return summary
        except Exception as e:
            logger.exception("OPENAI_SUMMARY_FAILED", extra={"error": type(e).__name__})
    return fallback_summary(text, max_length)


# ---------- Article analysis ----------

def _count_words(text: str, words: List[str]) -> int:
    return sum(len(re.findall(rf"\b{re.escape(w)}\b", text)) for w in words)


def rule_based_analysis(content: str) -> AnalysisOut:
    """Keyword analysis: lexicon sentiment with a margin, topic lookup, lead sentences as summary."""
    text = (content or "").lower()
    positive = _count_words(text, POSITIVE_WORDS)
    negative = _count_words(text, NEGATIVE_WORDS)
    if positive - negative > SENTIMENT_MARGIN:
        sentiment = "positive"
    elif negative - positive > SENTIMENT_MARGIN:
        sentiment = "negative"
    else:
        sentiment = "neutral"

    topics = [t for t in TOPIC_WORDS if t in text][:MAX_TOPICS] or list(DEFAULT_TOPICS)
    summary = _first_sentences(content) or "Unable to generate a summary."
    return AnalysisOut(sentiment=sentiment, topics=topics, summary=summary)


def analyze_article(content: str) -> AnalysisOut:
    if client is not None:
        try:
            data = _chat_json(
                "You analyze news articles. Respond with valid JSON only.",
                "Analyze this article. Return JSON with keys: sentiment (positive, negative or neutral), "
                f"topics (array of up to {MAX_TOPICS} short strings), summary (two sentences).\n\n"
                f"ARTICLE:\n{_truncate(content)}",
            )
            topics = [str(t) for t in (data.get("topics") or []) if str(t).strip()][:MAX_TOPICS]
            return AnalysisOut(
                sentiment=_sentiment(data.get("sentiment")),
                topics=topics or list(DEFAULT_TOPICS),
                summary=(data.get("summary") or "").strip() or fallback_summary(content),
            )
        except Exception as e:
            logger.exception("OPENAI_ANALYSIS_FAILED", extra={"error": type(e).__name__})
    return rule_based_analysis(content)


# ---------- Fact checks ----------

def claim_keywords(claim: str) -> List[str]:
    words = re.findall(r"[a-z0-9']+", (claim or "").lower())
    return [w for w in words if len(w) > 3 and w not in STOP_WORDS][:MAX_CLAIM_KEYWORDS]


def news_fact_check(claim: str) -> FactCheckOut:
    """Judge a claim by how many distinct outlets cover its keywords."""
    keywords = claim_keywords(claim)
    if not keywords:
        return FactCheckOut(
            is_reliable=False,
            confidence=40,
            explanation="The claim has too few specific terms to check against news coverage.",
        )

    page = search_news_articles(" OR ".join(keywords), page=1, page_size=5)
    sources: List[str] = []
    for a in page.articles:
        name = a.source.name
        if name and name not in sources:
            sources.append(name)

    if not sources:
        return FactCheckOut(
            is_reliable=False,
            confidence=30,
            explanation="No supporting news articles found to verify this claim.",
        )

    n = len(sources)
    if n > 2:
        explanation = f"Multiple reliable sources ({', '.join(sources[:3])}) report on this topic."
    else:
        explanation = f"Found limited coverage from {', '.join(sources)}. Verify with additional sources."
    return FactCheckOut(is_reliable=n > 1, confidence=min(90, 50 + 10 * n), explanation=explanation)


def fact_check_claim(claim: str) -> FactCheckOut:
    if client is not None:
        try:
            data = _chat_json(
                "You are a careful fact checker. Respond with valid JSON only.",
                "Assess whether this claim is reliable based on established reporting. Return JSON with keys: "
                "isReliable (boolean), confidence (0-100), explanation (one or two sentences).\n\n"
                f"CLAIM: {_truncate(claim, 1000)}",
                temperature=0.2,
            )
            return FactCheckOut(
                is_reliable=bool(data.get("isReliable")),
                confidence=_confidence(data.get("confidence"), 50),
                explanation=(data.get("explanation") or "").strip() or "No explanation provided.",
            )
        except Exception as e:
            logger.exception("OPENAI_FACTCHECK_FAILED", extra={"error": type(e).__name__})
    return news_fact_check(claim)


# ---------- Trend insights ----------

def _trend_title(category: str, article_title: str) -> str:
    words = (article_title or "").split()
    return f"{category.capitalize()} Trend: {' '.join(words[:6])}..."


def generate_news_insights(top_articles_by_category: Dict[str, Optional[NewsArticle]]) -> List[Insight]:
    """
    One trend insight per category from its top article. Categories whose call
    fails are skipped; raises InsightGenerationError if none succeed.
    """
    insights: List[Insight] = []
    for category, article in top_articles_by_category.items():
        if article is None:
            continue
        try:
            data = _chat_json(
                "You spot news trends. Respond with valid JSON only.",
                "From this headline and description, describe the broader trend in two sentences. "
                "Return JSON with keys: insight (string), sentiment (positive, negative or neutral), "
                "confidence (0-100).\n\n"
                f"CATEGORY: {category}\nTITLE: {article.title}\nDESCRIPTION: {_truncate(article.description, 1000)}",
            )
            content = (data.get("insight") or "").strip()
            if not content:
                continue
            insights.append(Insight(
                id=f"ai-{category}-{article.id[:12]}",
                type="trend",
                title=_trend_title(category, article.title),
                content=content,
                sentiment=_sentiment(data.get("sentiment")),
                confidence=_confidence(data.get("confidence")),
                category=category,
                related_articles=[article.id],
            ))
        except Exception as e:
            logger.warning(
                "OPENAI_INSIGHT_FAILED",
                extra={"category": category, "error": type(e).__name__},
            )

    if not insights:
        raise InsightGenerationError("no insights could be generated")
    return insights
