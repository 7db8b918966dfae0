# tests/test_auth.py
from urllib.parse import parse_qs, urlparse

def test_register_logs_in(client, new_user):
    assert new_user["name"] == "Test Reader"
    assert new_user["streaks"] == 0
    assert new_user["preferences"]["focusDuration"] == 20
    assert "password" not in new_user
    me = client.get("/api/user").json()
    assert me["username"] == new_user["username"]

def test_register_duplicates(client, new_user):
    r = client.post("/api/register", json={"username": new_user["username"], "password": "another1"})
    assert r.status_code == 400
    assert r.json()["message"] == "Username already exists"
    r = client.post("/api/register", json={
        "username": new_user["username"] + "x", "email": new_user["email"], "password": "another1",
    })
    assert r.json()["message"] == "Email already exists"

def test_login_logout(client, new_user):
    client.post("/api/logout")
    assert client.get("/api/user").status_code == 401

    r = client.post("/api/login", json={"username": new_user["username"], "password": "wrong-pass"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid username or password"

    r = client.post("/api/login", json={"username": new_user["username"], "password": "s3cret-pass"})
    assert r.status_code == 200
    assert client.get("/api/user").json()["id"] == new_user["id"]

def test_anonymous_user_is_not_authenticated(client):
    r = client.get("/api/user")
    assert r.status_code == 401
    assert r.json() == {"message": "Not authenticated"}

def test_demo_login(client):
    r = client.post("/api/login", json={"username": "demo", "password": "password"})
    assert r.status_code == 200
    assert r.json()["id"] == 1

def test_update_preferences_merges(client, new_user):
    r = client.put("/api/user/preferences", json={"interests": ["sports", "health"], "focusDuration": 45})
    assert r.status_code == 200
    prefs = r.json()["preferences"]
    assert prefs["interests"] == ["sports", "health"]
    assert prefs["focusDuration"] == 45

    prefs = client.put("/api/user/preferences", json={"sources": ["bbc"]}).json()["preferences"]
    assert prefs["interests"] == ["sports", "health"]
    assert prefs["sources"] == ["bbc"]

def test_update_preferences_rejects_unknown_interest(client, new_user):
    r = client.put("/api/user/preferences", json={"interests": ["astrology"]})
    assert r.status_code == 400

def test_google_login_not_configured(client):
    r = client.get("/auth/google", follow_redirects=False)
    assert r.status_code == 503

def _google(mocker):
    mocker.patch("concentribe.routers.auth.GOOGLE_CLIENT_ID", "cid")
    mocker.patch("concentribe.routers.auth.GOOGLE_CLIENT_SECRET", "secret")

def _start(client):
    r = client.get("/auth/google", follow_redirects=False)
    assert r.status_code == 302
    location = urlparse(r.headers["location"])
    assert location.netloc == "accounts.google.com"
    return parse_qs(location.query)["state"][0]

def test_google_callback_creates_user(client, mocker):
    _google(mocker)
    mocker.patch("concentribe.routers.auth._exchange_code", return_value={
        "sub": "g-123", "email": "ada@example.com", "name": "Ada L", "picture": "https://pic/ada.png",
    })
    state = _start(client)
    r = client.get("/auth/google/callback", params={"code": "c", "state": state}, follow_redirects=False)
    assert r.status_code == 302 and r.headers["location"] == "/"

    me = client.get("/api/user").json()
    assert me["googleId"] == "g-123"
    assert me["username"] == "ada"
    assert me["avatar"] == "https://pic/ada.png"

def test_google_callback_links_existing_email(client, new_user, mocker):
    _google(mocker)
    mocker.patch("concentribe.routers.auth._exchange_code", return_value={
        "sub": "g-link-" + new_user["username"], "email": new_user["email"],
    })
    client.post("/api/logout")
    state = _start(client)
    client.get("/auth/google/callback", params={"code": "c", "state": state}, follow_redirects=False)
    me = client.get("/api/user").json()
    assert me["id"] == new_user["id"]
    assert me["googleId"] == "g-link-" + new_user["username"]

def test_google_callback_rejects_bad_state(client, mocker):
    _google(mocker)
    exchange = mocker.patch("concentribe.routers.auth._exchange_code")
    _start(client)
    r = client.get("/auth/google/callback", params={"code": "c", "state": "forged"}, follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/auth?error=google_login_failed"
    exchange.assert_not_called()
