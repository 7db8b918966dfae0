# concentribe/scheduler.py
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED
import pytz

from .config import CACHE_REFRESH_MINUTES, NEWS_API_KEY, TIMEZONE
from .logging_setup import get_logger
from .news import fetch_news_articles

logger = get_logger("concentribe.scheduler")
scheduler = BackgroundScheduler(timezone=pytz.timezone(TIMEZONE))

CACHE_CATEGORIES = [
    "home", "world", "health", "technology",
    "business", "entertainment", "sports", "science",
]


def warm_article_cache() -> int:
    """Pull the first page of every category so the cache can cover NewsAPI outages."""
    if not NEWS_API_KEY:
        logger.info("CACHE_WARM_SKIPPED: NEWS_API_KEY not set")
        return 0
    total = 0
    for category in CACHE_CATEGORIES:
        page = fetch_news_articles(category, page=1, page_size=20)
        total += len(page.articles)
    logger.info(f"CACHE_WARMED: {total} articles across {len(CACHE_CATEGORIES)} categories")
    return total


def _job_listener(event):
    if event.exception:
        logger.error(
            "JOB_ERROR",
            exc_info=event.exception,
            extra={"handled": False, "job_id": event.job_id, "run_time": str(event.scheduled_run_time)},
        )
    else:
        logger.info(
            "JOB_OK",
            extra={"job_id": event.job_id, "run_time": str(event.scheduled_run_time)}
        )


def add_jobs():
    trigger = IntervalTrigger(minutes=CACHE_REFRESH_MINUTES, timezone=pytz.timezone(TIMEZONE))
    scheduler.add_job(warm_article_cache, trigger, id="warm_article_cache", replace_existing=True)
    scheduler.add_listener(_job_listener, EVENT_JOB_EXECUTED | EVENT_JOB_ERROR)
    logger.info(f"Job registered: warm_article_cache every {CACHE_REFRESH_MINUTES} min")


def start_scheduler():
    if not scheduler.running:
        scheduler.start()
        logger.info("APScheduler started")


def shutdown_scheduler(wait: bool = False):
    if scheduler.running:
        scheduler.shutdown(wait=wait)
        logger.info("APScheduler stopped")
