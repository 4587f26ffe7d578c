"""Shared test fixtures for cfb-loyalty tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from cfb_loyalty.app import app
from cfb_loyalty.settings import settings


@pytest.fixture()
def client():
    """Create a FastAPI test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _fake_api_key(monkeypatch):
    """Never depend on a real CFBD key or host from the environment."""
    monkeypatch.setattr(settings, "cfbd_api_key", "test-key")
    monkeypatch.setattr(settings, "cfbd_api_base", "https://cfbd.test")
