# tests/test_news.py
import requests

from concentribe.news import (
    article_id_from_url, estimate_reading_time, fetch_article_by_id, fetch_news_articles,
    get_cached_article, map_newsapi_article, search_news_articles, url_from_article_id,
)

def _raw(url, title="Quantum chips get faster", source="Wired"):
    return {
        "source": {"id": None, "name": source},
        "title": title,
        "description": "A long enough description",
        "content": "word " * 450 + "[+1200 chars]",
        "url": url,
        "urlToImage": "https://img/x.png",
        "publishedAt": "2025-01-02T10:00:00Z",
    }

def _response(mocker, payload, status=200):
    resp = mocker.Mock(status_code=status)
    resp.json.return_value = payload
    return resp

def test_article_id_roundtrip():
    url = "https://www.example.com/a/b?c=d"
    aid = article_id_from_url(url)
    assert "/" not in aid and "+" not in aid
    assert url_from_article_id(aid) == url
    assert url_from_article_id("not-a-url-id") is None

def test_reading_time():
    assert estimate_reading_time("") == 1
    assert estimate_reading_time("w " * 400) == 2
    assert estimate_reading_time("w " * 401) == 3

def test_map_article():
    art = map_newsapi_article(_raw("https://wired.com/q"), "technology")
    assert art.id == article_id_from_url("https://wired.com/q")
    assert art.image == "https://img/x.png"
    assert art.source.name == "Wired"
    assert art.estimated_reading_time == 3
    assert art.published_at == "2025-01-02T10:00:00Z"

def test_map_article_derives_missing_description():
    raw = _raw("https://x.com/1")
    raw["description"] = ""
    raw["content"] = ""
    assert map_newsapi_article(raw, "home").description.endswith("Read the full article for more details.")

def test_fetch_caches_live_results(mocker):
    mocker.patch("concentribe.news.NEWS_API_KEY", "k")
    payload = {"status": "ok", "totalResults": 25, "articles": [
        _raw("https://live.example.com/one"),
        {"title": "[Removed]", "url": "https://removed.example.com"},
    ]}
    get = mocker.patch("concentribe.news.requests.get", return_value=_response(mocker, payload))

    page = fetch_news_articles("science", page=1, page_size=10)
    assert [a.url for a in page.articles] == ["https://live.example.com/one"]
    assert page.has_more
    assert get.call_args.kwargs["params"]["category"] == "science"
    assert get_cached_article(page.articles[0].id).category == "science"

def test_fetch_falls_back_to_cache_on_error(mocker):
    mocker.patch("concentribe.news.NEWS_API_KEY", "k")
    mocker.patch("concentribe.news.requests.get", side_effect=requests.ConnectionError("down"))
    page = fetch_news_articles("technology", page=1, page_size=10)
    assert page.articles
    assert all(a.category == "technology" for a in page.articles)
    assert page.has_more is False

def test_fetch_without_key_uses_cache(mocker):
    get = mocker.patch("concentribe.news.requests.get")
    page = fetch_news_articles("home", page=1, page_size=5)
    assert len(page.articles) == 5
    get.assert_not_called()

def test_non_ok_status_falls_back(mocker):
    mocker.patch("concentribe.news.NEWS_API_KEY", "k")
    mocker.patch("concentribe.news.requests.get",
                 return_value=_response(mocker, {"status": "error", "message": "rateLimited"}))
    page = search_news_articles("vaccine")
    assert page.has_more is False

def test_article_by_id_from_cache():
    cached = fetch_news_articles("health", page=1, page_size=1).articles[0]
    assert fetch_article_by_id(cached.id) == cached

def test_article_by_id_builds_basic_article():
    aid = article_id_from_url("https://www.techsite.io/2025/new-gadget-launch.html")
    art = fetch_article_by_id(aid)
    assert art.id == aid
    assert art.title == "New gadget launch"
    assert art.source.name == "techsite.io"
    assert art.category == "technology"

def test_article_by_id_unknown():
    assert fetch_article_by_id("zzzz") is None
