from __future__ import annotations

from app.api.routes.chips import router as chips_router

__all__ = ["chips_router"]
