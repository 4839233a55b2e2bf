import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from members_api.core.db import Database
from members_api.main import create_app
from members_api.models import entities  # noqa: F401
from members_api.models.base import Base
from members_client.api import MembersApi
from members_client.reconciler import ViewReconciler


@pytest.fixture
def api_client():
    database = Database(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=database.engine)
    with TestClient(create_app(database)) as test_client:
        yield test_client
    database.dispose()


@pytest.fixture
def reconciler(api_client):
    return ViewReconciler(MembersApi(api_client))


def mock_api(handler) -> MembersApi:
    return MembersApi(httpx.Client(base_url="http://members.test", transport=httpx.MockTransport(handler)))


@pytest.fixture
def make_mock_api():
    return mock_api
