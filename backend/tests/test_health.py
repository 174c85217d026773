"""Tests for the healthcheck endpoint."""

from __future__ import annotations

from conftest import TestConfig, create_app


def create_test_app():
    """Create an application instance configured for tests."""

    return create_app(TestConfig)


def test_health_endpoint_returns_ok():
    """The healthcheck endpoint should return a JSON payload with status ok."""

    app = create_test_app()
    client = app.test_client()

    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "generation": False}


def test_health_reports_registered_source(client, fragment_source):
    fragment_source([])

    response = client.get("/api/health")

    assert response.get_json()["generation"] is True
