"""Tests for app construction and startup behavior."""

from __future__ import annotations

import logging

from fastapi.testclient import TestClient


def test_startup_logs_single_line(make_app, caplog) -> None:
    app = make_app(port=4321, rate_limit_enabled=False)

    with caplog.at_level(logging.INFO, logger="app.core.app_factory"):
        with TestClient(app):
            pass

    startup = [r.getMessage() for r in caplog.records if r.name == "app.core.app_factory"]
    assert startup == ["6G RAN Viz server running at http://localhost:4321"]


def test_state_holds_injected_collaborators(make_app) -> None:
    app = make_app()

    assert app.state.chip_catalog is not None
    assert "gNB-mmWave" in app.state.chip_catalog
    assert app.state.rate_limiter is not None
    assert app.state.settings.app.port == 3000


def test_static_only_variant(make_app) -> None:
    app = make_app(api_enabled=False, rate_limit_enabled=False)

    assert app.state.chip_catalog is None
    assert app.state.rate_limiter is None
    assert app.openapi_url is None
