"""HTTP middleware for request ID propagation and correlation.

The middleware:
- Accepts the incoming request id header or generates a UUID
- Stores request_id in contextvars for log correlation
- Echoes request_id and total request duration in the response headers
- Clears context after request completion to prevent context leaks

Usage:
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response

from app.core.logging import clear_request_id, set_request_id


async def request_id_middleware(request: Request, call_next) -> Response:
    """HTTP middleware for request ID generation and propagation.

    If the client provides the configured request id header (``X-Request-ID``
    by default, see ``LOG_REQUEST_ID_HEADER``), that value is used. Otherwise
    a new UUID is generated.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: The response from the next handler with request id and
            duration headers added.
    """

    header_name = request.app.state.settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    finally:
        clear_request_id()

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response


# Literal segments of the API routes, matched case-insensitively
_API_SEGMENTS = ("api", "chips")


def normalize_api_path(path: str) -> str:
    """Canonical form of a chip API path.

    ``/API/Chips/gNB-mmWave/`` becomes ``/api/chips/gNB-mmWave``: the fixed
    segments are lower-cased and one trailing slash is dropped. Chip ids keep
    their case. Paths outside ``/api/chips`` are returned unchanged.
    """

    segments = path.split("/")
    head = [s.lower() for s in segments[1 : 1 + len(_API_SEGMENTS)]]
    if tuple(head) != _API_SEGMENTS:
        return path

    segments[1 : 1 + len(_API_SEGMENTS)] = _API_SEGMENTS
    normalized = "/".join(segments)
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    return normalized


async def api_path_middleware(request: Request, call_next) -> Response:
    """Route ``/api/chips`` paths regardless of case or a trailing slash.

    Without this, such paths fall through to the static mount and the client
    receives the HTML entry document instead of JSON.
    """

    path = request.scope["path"]
    normalized = normalize_api_path(path)
    if normalized != path:
        request.scope["path"] = normalized
    return await call_next(request)
