"""Request-scoped accessors for objects built by the app factory."""

from __future__ import annotations

from fastapi import Request

from app.services.chip_catalog import ChipCatalog


def get_chip_catalog(request: Request) -> ChipCatalog:
    """Return the catalog loaded at startup for this application."""
    return request.app.state.chip_catalog
