# tests/test_bookmarks.py
from concentribe.news import article_id_from_url

def _some_article_id(client):
    return client.get("/api/news/category/health", params={"limit": 1}).json()["articles"][0]["id"]

def test_add_list_remove(client, new_user):
    aid = _some_article_id(client)
    r = client.post("/api/bookmarks", json={"articleId": aid})
    assert r.status_code == 201
    assert r.json() == {"bookmarked": True}
    # adding twice is harmless
    assert client.post("/api/bookmarks", json={"articleId": aid}).status_code == 201

    listed = client.get("/api/bookmarks").json()
    assert [a["id"] for a in listed] == [aid]

    r = client.delete(f"/api/bookmarks/{aid}")
    assert r.json() == {"bookmarked": False}
    assert client.get("/api/bookmarks").json() == []
    assert client.delete(f"/api/bookmarks/{aid}").status_code == 404

def test_toggle(client, new_user):
    aid = _some_article_id(client)
    assert client.post("/api/bookmarks/toggle", json={"articleId": aid}).json() == {"bookmarked": True}
    assert client.post("/api/bookmarks/toggle", json={"articleId": aid}).json() == {"bookmarked": False}

def test_uncached_article_is_resolved_and_cached(client, new_user):
    aid = article_id_from_url("https://www.healthnews.org/sleep-and-memory-study")
    assert client.post("/api/bookmarks", json={"articleId": aid}).status_code == 201
    listed = client.get("/api/bookmarks").json()
    assert listed[0]["id"] == aid
    assert listed[0]["category"] == "health"

def test_bookmark_errors(client, new_user):
    r = client.post("/api/bookmarks", json={})
    assert r.status_code == 400
    assert r.json()["message"] == "Article ID is required"
    r = client.post("/api/bookmarks", json={"articleId": "zzzz"})
    assert r.status_code == 404
    assert r.json()["message"] == "Article not found"
