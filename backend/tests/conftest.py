import pytest
from fastapi.testclient import TestClient

from finance_tracker.config import Settings
from finance_tracker.database import get_session
from finance_tracker.main import create_app


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        jwt_secret="test-secret",
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(client):
    """Session on the same in-memory database the app uses."""
    session = get_session()
    yield session
    session.close()


@pytest.fixture
def register(client):
    """Register a user through the API and return (user_id, auth headers)."""
    def _register(username="alice", password="secret123"):
        response = client.post(
            "/api/auth/register",
            json={"username": username, "email": f"{username}@finance.io", "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"]["id"], {"Authorization": f"Bearer {body['token']}"}
    return _register
