import pytest

from config import settings

TEST_API_KEY = "test-api-key"


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setattr(settings, "API_KEY", TEST_API_KEY)
    return TEST_API_KEY


@pytest.fixture
def client(api_key):
    from api.app import app

    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def auth_headers(api_key):
    return {"Authorization": f"Bearer {api_key}"}
