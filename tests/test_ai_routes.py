# tests/test_ai_routes.py
def test_homepage_insights_cover_categories(client):
    r = client.get("/api/ai/insights")
    assert r.status_code == 200
    body = r.json()
    assert len(body) == 6
    assert len({i["category"] for i in body}) == 6

def test_refresh_excludes_previous(client):
    r = client.get("/api/ai/insights", params={"exclude": "tech1,tech2,tech4"})
    body = r.json()
    kinds = [i["type"] for i in body]
    assert kinds.count("trend") == 2 and kinds.count("analysis") == 1 and kinds.count("factCheck") == 1
    assert not {"tech1", "tech2", "tech4"} & {i["id"] for i in body}

def test_article_insights(client):
    body = client.get("/api/ai/insights/some-id").json()
    assert body
    assert all(i["relatedArticles"] == ["some-id"] for i in body)

def test_analyze(client):
    r = client.post("/api/ai/analyze", json={"content": "Growth, success and progress for the economy."})
    assert r.status_code == 200
    assert r.json()["sentiment"] == "positive"
    assert "economy" in r.json()["topics"]

def test_analyze_requires_content(client):
    r = client.post("/api/ai/analyze", json={})
    assert r.status_code == 400
    assert r.json()["message"] == "Content is required"

def test_summarize(client):
    r = client.post("/api/ai/summarize", json={"text": "One. Two. Three.", "maxLength": 50})
    assert r.json() == {"summary": "One. Two."}
    assert client.post("/api/ai/summarize", json={"text": ""}).json()["message"] == "Text content is required"

def test_factcheck(client, mocker):
    from concentribe.schema import ArticlePage
    mocker.patch("concentribe.analysis.search_news_articles", return_value=ArticlePage())
    r = client.post("/api/ai/factcheck", json={"claim": "Aliens landed yesterday"})
    assert r.json() == {
        "isReliable": False,
        "confidence": 30,
        "explanation": "No supporting news articles found to verify this claim.",
    }
    assert client.post("/api/ai/factcheck", json={"claim": " "}).status_code == 400
