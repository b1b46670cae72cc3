import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from todo_api.core.config import Settings
from todo_api.main import create_app
from todo_api.models import User

API = "/api/v1"


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret",
        ENVIRONMENT="test",
        _env_file=None,
    )


@pytest.fixture
def engine():
    # One shared in-memory database for every connection
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def app(settings, engine):
    return create_app(settings=settings, engine=engine)


@pytest.fixture
def client(app):
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def session(engine, client):
    # Depends on client so the lifespan hook has created the tables
    with Session(engine) as session:
        yield session


@pytest.fixture
def register(client):
    def _register(email="alice@example.com", password="secret123", full_name="Alice"):
        response = client.post(
            f"{API}/auth/register",
            json={"email": email, "password": password, "fullName": full_name},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {
            "id": body["data"]["id"],
            "token": body["access_token"],
            "headers": {"Authorization": f"Bearer {body['access_token']}"},
        }

    return _register


@pytest.fixture
def make_user(session):
    def _make_user(email):
        user = User(email=email, password_hash="not-a-real-hash", full_name=email.split("@")[0])
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user
