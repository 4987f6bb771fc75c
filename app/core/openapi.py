"""OpenAPI metadata and customization utilities.

Enriches the generated schema with tags metadata and documents the 429
response every operation can return once the rate limiter is enabled.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

from app.core.rate_limit import THROTTLED_MESSAGE

_THROTTLED_RESPONSE: Dict[str, Any] = {
    "description": (
        "Rate limit exceeded. The body is a JSON object with an `error` "
        "message, not plain text."
    ),
    "headers": {
        "Retry-After": {
            "description": "Seconds until the client's window resets.",
            "schema": {"type": "integer"},
        },
    },
    "content": {
        "application/json": {
            "example": {"error": THROTTLED_MESSAGE},
        },
    },
}


def apply_openapi_customizations(app: FastAPI, *, rate_limited: bool) -> None:
    """Patch FastAPI's OpenAPI generation to add tags and throttling docs."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        desired_tags = [
            {
                "name": "Chips",
                "description": "Read-only lookup over the chip configuration file.",
            },
        ]
        for tag in desired_tags:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        if rate_limited:
            for methods in schema.get("paths", {}).values():
                for method_obj in methods.values():
                    if isinstance(method_obj, dict):
                        method_obj.setdefault("responses", {}).setdefault(
                            "429", _THROTTLED_RESPONSE
                        )

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
