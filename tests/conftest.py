import pytest
from fastapi.testclient import TestClient

import main
from config import Settings
from state import AppState


@pytest.fixture
def settings(tmp_path):
    return Settings(
        session_path=str(tmp_path / "session.json"),
        checkout_delay=0,
        topup_delay=0,
    )


@pytest.fixture
def state(settings):
    return AppState(settings)


@pytest.fixture
def client(state):
    main.app.dependency_overrides[main.get_state] = lambda: state
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


@pytest.fixture
def customer(client):
    client.post("/api/auth/login", json={"email": "john@example.com", "password": "secret"})
    return client


@pytest.fixture
def admin(client):
    client.post("/api/auth/login", json={"email": "admin@example.com", "password": "secret"})
    return client
