"""Tests for the error envelopes produced by the application's exception handlers."""

import logging

import pytest
from fastapi.testclient import TestClient

from catalog.server.api import create_app
from catalog.server.config import Config


@pytest.fixture
def app():
    return create_app(Config())


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


def test_unknown_route_returns_404_envelope(client):
    response = client.get("/api/v2/things")

    assert response.status_code == 404
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"success": False, "error": "Not Found"}


def test_method_not_allowed_keeps_allow_header(client):
    response = client.post("/api/v1/items")

    assert response.status_code == 405
    assert response.headers["allow"] == "GET"
    assert response.json() == {"success": False, "error": "Method not allowed"}


def test_failure_envelope_has_no_data_key(client):
    body = client.get("/api/v1/items/missing").json()

    assert body["success"] is False
    assert "data" not in body


def test_validation_error_returns_422_envelope(app, client):
    async def typed(count: int) -> dict:
        return {"count": count}

    app.add_api_route("/typed", typed, methods=["GET"])

    response = client.get("/typed", params={"count": "not-a-number"})

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert "count" in body["error"]


def test_unhandled_exception_returns_500_envelope(app, client, caplog):
    async def boom():
        raise RuntimeError("kaboom")

    app.add_api_route("/boom", boom, methods=["GET"])

    with caplog.at_level(logging.ERROR, logger="catalog.server.api"):
        response = client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal Server Error"}
    assert "kaboom" not in response.text
    assert any("Unhandled exception" in r.getMessage() for r in caplog.records)


def test_create_app_ignores_invalid_port_in_environment(monkeypatch):
    monkeypatch.setenv("PORT", "not-a-port")

    client = TestClient(create_app())

    assert client.get("/api/v1/items/1").status_code == 200
