"""Shared fixtures: an app on the in-memory backend and signed-in users."""

from typing import Dict

import pytest
from fastapi.testclient import TestClient

from src.server.app import create_app
from src.server.dependencies import clear_dependency_caches

TEST_CONFIG = """
datastore:
  backend: memory
auth:
  provider: mock
log:
  level: WARNING
  file: ""
"""


@pytest.fixture
def client(tmp_path, monkeypatch):
    """TestClient over a fresh app with empty in-memory storage."""
    config_path = tmp_path / "app_config.yaml"
    config_path.write_text(TEST_CONFIG, encoding="utf-8")
    monkeypatch.setenv("DAYBOOK_CONFIG_PATH", str(config_path))
    clear_dependency_caches()
    with TestClient(create_app()) as test_client:
        yield test_client
    clear_dependency_caches()


@pytest.fixture
def login_as(client):
    """Sign in through the API; returns the Authorization header for that user."""

    def _login(email: str) -> Dict[str, str]:
        resp = client.post("/api/auth/login", json={"email": email, "password": "secret"})
        assert resp.status_code == 200
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _login


@pytest.fixture
def alice(login_as) -> Dict[str, str]:
    return login_as("alice@example.com")


@pytest.fixture
def bob(login_as) -> Dict[str, str]:
    return login_as("bob@example.com")
