from __future__ import annotations

from fastapi.testclient import TestClient


def test_preserves_incoming_request_id_header(client: TestClient):
    incoming_id = "test-request-id-123"
    resp = client.get("/api/chips", headers={"X-Request-ID": incoming_id})

    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == incoming_id


def test_generates_request_id_when_missing(client: TestClient):
    resp = client.get("/")

    assert resp.status_code == 200
    generated = resp.headers.get("X-Request-ID")
    assert generated
    assert isinstance(generated, str)

    duration = resp.headers.get("X-Request-Duration-ms")
    assert duration is not None
    assert float(duration) >= 0


def test_request_id_on_error_responses(client: TestClient):
    resp = client.get("/api/chips/unknown-chip", headers={"X-Request-ID": "req-404"})

    assert resp.status_code == 404
    assert resp.headers.get("X-Request-ID") == "req-404"


def test_custom_request_id_header(make_settings):
    from app.core.app_factory import create_app
    from app.core.config import LogSettings

    settings = make_settings(rate_limit_enabled=False)
    settings.log = LogSettings(request_id_header="X-Correlation-ID")
    client = TestClient(create_app(settings, configure_logs=False))

    resp = client.get("/", headers={"X-Correlation-ID": "corr-1"})

    assert resp.headers.get("X-Correlation-ID") == "corr-1"
    assert "X-Request-ID" not in resp.headers
