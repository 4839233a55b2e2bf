import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from members_api.core.db import Database
from members_api.main import create_app
from members_api.models import entities  # noqa: F401
from members_api.models.base import Base


@pytest.fixture
def database():
    database = Database(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=database.engine)
    yield database
    database.dispose()


@pytest.fixture
def app(database):
    return create_app(database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(database):
    db = sessionmaker(autocommit=False, autoflush=False, bind=database.engine)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def create_member(client):
    def _create(name="Ann", email=None, join_date="2024-01-01", **extra):
        body = {
            "name": name,
            "email": email or f"{name.lower().replace(' ', '.')}@example.com",
            "join_date": join_date,
            **extra,
        }
        response = client.post("/api/members", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
