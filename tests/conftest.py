import pytest
from fastapi.testclient import TestClient

from todo_api.main import create_app
from todo_api.settings import Settings


@pytest.fixture
def app():
    # A fresh app per test owns a fresh store, so ids always start at 1.
    return create_app(Settings())


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def create_todo(client):
    def _create(title="Test Task"):
        res = client.post("/todos", json={"title": title})
        assert res.status_code == 201
        return res.json()

    return _create
