# tests/conftest.py
import pathlib, uuid, pytest
from dotenv import load_dotenv

# Config is read at import time, so the test env must be in place before any concentribe import
load_dotenv(pathlib.Path(__file__).parent / ".env.test", override=True)


@pytest.fixture(scope="session", autouse=True)
def _init_db():
    from concentribe.store import init_db
    init_db()


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient
    from concentribe.main import app
    return TestClient(app)


@pytest.fixture()
def register(client):
    """Returns a function that registers a throwaway user; the client keeps its session cookie."""
    def _register():
        username = f"user_{uuid.uuid4().hex[:10]}"
        r = client.post("/api/register", json={
            "username": username,
            "email": f"{username}@example.com",
            "password": "s3cret-pass",
            "name": "Test Reader",
        })
        assert r.status_code == 201, r.text
        return r.json()
    return _register


@pytest.fixture()
def new_user(register):
    return register()
