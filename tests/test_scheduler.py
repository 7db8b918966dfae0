# tests/test_scheduler.py
from concentribe import scheduler
from concentribe.schema import ArticlePage

def test_warm_cache_skips_without_key(mocker):
    fetch = mocker.patch("concentribe.scheduler.fetch_news_articles")
    assert scheduler.warm_article_cache() == 0
    fetch.assert_not_called()

def test_warm_cache_pulls_every_category(mocker):
    mocker.patch("concentribe.scheduler.NEWS_API_KEY", "k")
    fetch = mocker.patch("concentribe.scheduler.fetch_news_articles", return_value=ArticlePage())
    assert scheduler.warm_article_cache() == 0
    assert [c.args[0] for c in fetch.call_args_list] == scheduler.CACHE_CATEGORIES

def test_job_registered(mocker):
    add_job = mocker.patch.object(scheduler.scheduler, "add_job")
    mocker.patch.object(scheduler.scheduler, "add_listener")
    scheduler.add_jobs()
    args, kwargs = add_job.call_args
    assert args[0] is scheduler.warm_article_cache
    assert kwargs["id"] == "warm_article_cache"

def test_lifespan_runs_without_scheduler(client):
    # entering the client runs startup/shutdown; ENABLE_SCHEDULER is off in tests
    with client as c:
        assert c.get("/health").json() == {"status": "ok"}
    assert not scheduler.scheduler.running
