"""Tests for the web app endpoints."""

import importlib.util
from pathlib import Path

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

APP_PATH = Path(__file__).resolve().parent.parent / "app" / "src" / "main.py"


@pytest.fixture
def client(monkeypatch):
    monkeypatch.delenv("DEEPER_TILES_CONFIG", raising=False)
    spec = importlib.util.spec_from_file_location("deeper_tiles_app", APP_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return TestClient(module.app)


def test_tiles_returns_configuration(client):
    """GET /api/tiles should return the active theme."""
    response = client.get("/api/tiles")

    assert response.status_code == 200
    body = response.json()
    assert body["tiles"]["2"]["text"] == "Stop Thinking"
    assert "RiseFall" in body["effects"]


def test_preview_returns_gif(client):
    """GET /api/preview should stream an animated preview."""
    response = client.get("/api/preview", params={"ranks": "2,16", "format": "gif"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/gif"
    assert response.content.startswith(b"GIF89")


def test_preview_rejects_bad_input(client):
    """Invalid ranks or formats should return 400."""
    assert client.get("/api/preview", params={"ranks": "abc"}).status_code == 400
    assert client.get("/api/preview", params={"format": "svg"}).status_code == 400
