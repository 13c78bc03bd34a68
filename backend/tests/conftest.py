import pytest
from fastapi.testclient import TestClient #gives you a fake http client that can call your FastAPI routes without running a real server.

from app.api.deps import get_store
from app.main import app
from app.services.suggestion_store import InMemorySuggestionStore


@pytest.fixture()
def store():
    return InMemorySuggestionStore() #fresh store per test so stored suggestions never leak between tests.


@pytest.fixture() #test client
def client(store): #fake http client
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
