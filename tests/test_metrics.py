"""Tests for the Prometheus endpoint and request metrics middleware."""

from fastapi.testclient import TestClient

from user_service.api.app import create_app
from user_service.config import Settings


def test_metrics_exposition(client):
    client.get("/users")
    client.get("/users")

    response = client.get("/metrics")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    body = response.text
    assert 'http_requests_total{method="GET",path="/users",status_code="200"} 2.0' in body
    assert "http_request_duration_seconds_bucket" in body


def test_metrics_use_route_templates(client):
    client.delete("/users/12345")
    body = client.get("/metrics").text
    assert 'path="/users/{user_id}",status_code="404"' in body
    assert "/users/12345" not in body


def test_metrics_render_failure(app, client, monkeypatch):
    def broken_render():
        raise RuntimeError("collector exploded")

    monkeypatch.setattr(app.state.metrics, "render", broken_render)
    response = client.get("/metrics")
    assert response.status_code == 500
    assert response.text == "collector exploded"


def test_middleware_can_be_disabled(monkeypatch, repository):
    monkeypatch.setenv("METRICS_ENABLED", "false")
    app = create_app(settings=Settings(), repository=repository)

    with TestClient(app) as client:
        client.get("/users")
        response = client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total{" not in response.text


def test_registries_are_per_app(repository):
    first = create_app(settings=Settings(), repository=repository)
    second = create_app(settings=Settings(), repository=repository)
    assert first.state.metrics.registry is not second.state.metrics.registry
