# tests/test_health.py
def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}

def test_request_id_is_echoed(client):
    r = client.get("/health", headers={"x-request-id": "abc123"})
    assert r.headers["X-Request-ID"] == "abc123"

def test_unknown_route_is_json_error(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert r.json() == {"message": "Not Found"}

def test_validation_errors_are_400(client):
    r = client.get("/api/news/category/not-a-category")
    assert r.status_code == 400
    assert "category" in r.json()["message"]
