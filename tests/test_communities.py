# tests/test_communities.py
def _by_id(communities, cid):
    return next(c for c in communities if c["id"] == cid)

def test_list_communities(client):
    body = client.get("/api/communities").json()
    assert len(body) == 10
    first = body[0]
    assert {"id", "name", "description", "memberCount", "topics", "image", "joined"} <= set(first)

def test_demo_user_memberships(client):
    joined = {c["id"] for c in client.get("/api/communities/joined").json()}
    assert {"1", "2", "3", "4", "6"} <= joined

def test_join_and_leave_update_counts(client, new_user):
    before = _by_id(client.get("/api/communities").json(), "5")
    assert before["joined"] is False

    assert client.post("/api/communities/5/join").json() == {"joined": True, "communityId": "5"}
    after = _by_id(client.get("/api/communities").json(), "5")
    assert after["joined"] is True
    assert after["memberCount"] == before["memberCount"] + 1
    # joining twice changes nothing
    client.post("/api/communities/5/join")
    assert _by_id(client.get("/api/communities").json(), "5")["memberCount"] == after["memberCount"]

    assert client.post("/api/communities/5/leave").json() == {"joined": False, "communityId": "5"}
    assert _by_id(client.get("/api/communities").json(), "5")["memberCount"] == before["memberCount"]

def test_post_shows_in_community_and_feed(client, new_user):
    client.post("/api/communities/7/join")
    r = client.post("/api/communities/7/posts", json={"title": "Hello", "content": "First post here"})
    assert r.status_code == 201
    post = r.json()
    assert post["communityId"] == "7"
    assert post["author"]["name"] == "Test Reader"

    posts = client.get("/api/communities/7/posts").json()
    assert posts[0]["id"] == post["id"]
    # Read back from SQLite, still reported as UTC
    assert post["createdAt"].endswith("+00:00")
    assert posts[0]["createdAt"] == post["createdAt"]
    feed = client.get("/api/communities/feed").json()
    assert post["id"] in [p["id"] for p in feed]

def test_empty_feed_without_memberships(client, new_user):
    assert client.get("/api/communities/feed").json() == []

def test_invalid_and_missing_communities(client):
    r = client.post("/api/communities/abc/join")
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid community ID"
    r = client.get("/api/communities/999/posts")
    assert r.status_code == 404
    assert r.json()["message"] == "Community not found"
    assert client.post("/api/communities/999/posts", json={"title": "t", "content": "c"}).status_code == 404
