"""Rate limiting middleware.

Every request, static assets included, consumes one unit from the client's
budget before routing. The limiter instance lives on ``app.state`` so tests
and alternative deployments can inject their own.

Rate limiting strategy:
- Fixed window per client address (``ip:<host>``).
- Within budget: standard ``RateLimit-*`` headers (IETF draft 6) are added.
- Over budget: 429 with ``Retry-After``; the route never runs.
"""

from __future__ import annotations

import hashlib
import logging

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from app.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from app.core.config import AppSettings

logger = logging.getLogger(__name__)

THROTTLED_MESSAGE = "Too many requests, please try again later."


def build_rate_limiter(app_settings: AppSettings) -> AbstractRateLimiter:
    """Create the process-wide limiter from configuration."""

    return InMemoryFixedWindowRateLimiter(
        limit=app_settings.rate_limit_requests,
        window_seconds=app_settings.rate_limit_window_seconds,
    )


def build_rate_limit_key(request: Request) -> str:
    """Build the limiter key for the current request.

    Args:
        request: Incoming request.

    Returns:
        str: Namespaced limiter key.
    """

    client_host = request.client.host if request.client else "unknown"
    return f"ip:{client_host}"


def _hash_limiter_key(key: str) -> str:
    """Hash the rate limit key for logging without exposing client addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
    """Standard rate limit headers for ``result`` (no legacy ``X-`` variants)."""

    headers = {
        "RateLimit-Policy": f"{result.limit};w={result.window_seconds}",
        "RateLimit-Limit": str(result.limit),
        "RateLimit-Remaining": str(result.remaining),
        "RateLimit-Reset": str(result.reset_after_seconds),
    }
    if not result.allowed and result.retry_after_seconds is not None:
        headers["Retry-After"] = str(result.retry_after_seconds)
    return headers


async def rate_limit_middleware(request: Request, call_next) -> Response:
    """HTTP middleware enforcing the per-client request ceiling.

    Args:
        request: Incoming request.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: 429 when the client exceeded its budget, otherwise the
            downstream response.
    """

    app_settings: AppSettings = request.app.state.settings.app
    limiter: AbstractRateLimiter | None = request.app.state.rate_limiter
    if limiter is None:
        return await call_next(request)

    key = build_rate_limit_key(request)
    result = limiter.consume(key)
    headers = rate_limit_headers(result) if app_settings.rate_limit_include_headers else {}

    if not result.allowed:
        logger.warning(
            "rate_limit.exceeded",
            extra={
                "key_hash": _hash_limiter_key(key),
                "limit": result.limit,
                "window_s": result.window_seconds,
                "retry_after_s": result.retry_after_seconds,
                "request_path": request.url.path,
            },
        )
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={"error": THROTTLED_MESSAGE},
            headers=headers or None,
        )

    logger.debug(
        "rate_limit.allowed",
        extra={
            "key_hash": _hash_limiter_key(key),
            "limit": result.limit,
            "remaining": result.remaining,
        },
    )

    response = await call_next(request)
    for name, value in headers.items():
        response.headers[name] = value
    return response
