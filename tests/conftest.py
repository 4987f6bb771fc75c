"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
Environment variables are set before any app import so the global settings
object is built for the testing environment.
"""

import json
import os
from pathlib import Path
from typing import Any, Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from app.core.app_factory import create_app  # noqa: E402
from app.core.config import AppSettings, LogSettings, Settings  # noqa: E402


INDEX_HTML = "<!DOCTYPE html><html><body><div id=\"root\">RAN Viz</div></body></html>\n"

SAMPLE_CHIPS: dict[str, Any] = {
    "gNB-mmWave": {"label": "gNB mmWave", "band": "FR2", "centerFrequencyGHz": 28},
    "RU-massiveMIMO": {"label": "Radio Unit", "band": "FR1", "antennaElements": 64},
    "UE-handset": {"label": "UE handset", "band": "FR1/FR2", "antennaElements": 4},
    "placeholder": None,
}


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    """Create a public directory with an entry document, assets and chips.json."""
    root = tmp_path / "public"
    (root / "css").mkdir(parents=True)
    (root / "js").mkdir()
    (root / "guide").mkdir()

    (root / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (root / "css" / "style.css").write_text("body { color: red; }\n", encoding="utf-8")
    (root / "js" / "app.js").write_text("console.log('viz');\n", encoding="utf-8")
    (root / "guide" / "index.html").write_text("<p>guide</p>\n", encoding="utf-8")
    (root / "chips.json").write_text(json.dumps(SAMPLE_CHIPS), encoding="utf-8")

    # Outside the public root; must never be served
    (tmp_path / "secret.txt").write_text("top secret\n", encoding="utf-8")
    return root


@pytest.fixture
def make_settings(public_dir: Path) -> Callable[..., Settings]:
    """Factory for Settings pointing at the temporary public directory."""

    def _make(**app_overrides: Any) -> Settings:
        app_overrides.setdefault("public_dir", public_dir)
        app_overrides.setdefault("port", 3000)
        return Settings(app=AppSettings(**app_overrides), log=LogSettings())

    return _make


@pytest.fixture
def make_app(make_settings: Callable[..., Settings]) -> Callable[..., FastAPI]:
    """Factory for isolated app instances (logging left to pytest)."""

    def _make(*, rate_limiter=None, **app_overrides: Any) -> FastAPI:
        return create_app(
            make_settings(**app_overrides),
            rate_limiter=rate_limiter,
            configure_logs=False,
        )

    return _make


@pytest.fixture
def client(make_app: Callable[..., FastAPI]) -> TestClient:
    """Client for an app with the API enabled and rate limiting off."""
    return TestClient(make_app(rate_limit_enabled=False))
