"""Static asset hosting with single-page-application fallback.

Files under the public directory are served verbatim. Anything that does not
resolve to a file (unknown paths, traversal attempts, unreadable files) gets
the entry document instead, so client-side routing can take over.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from starlette.exceptions import HTTPException
from starlette.responses import FileResponse, Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

logger = logging.getLogger(__name__)

# Statuses StaticFiles uses for "could not serve this path"
_NOT_FOUND_STATUSES = frozenset({401, 404})


class SPAStaticFiles(StaticFiles):
    """StaticFiles that answers every unmatched GET/HEAD with ``fallback_file``."""

    def __init__(self, *, directory: str | os.PathLike[str], fallback_file: str | os.PathLike[str]) -> None:
        super().__init__(directory=directory, html=True)
        self.fallback_file = Path(fallback_file)

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            response = await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code not in _NOT_FOUND_STATUSES:
                raise
        except OSError as exc:
            logger.warning(
                "static.lookup_failed",
                extra={"request_path": scope.get("path"), "error_msg": str(exc)},
            )
        else:
            # html=True renders a public/404.html with status 404 when present
            if response.status_code != 404:
                return response

        return self.fallback_response(scope)

    def fallback_response(self, scope: Scope) -> Response:
        """Entry document response, 200 regardless of the requested path."""
        if not self.fallback_file.is_file():
            raise HTTPException(status_code=404)

        logger.debug("static.fallback", extra={"request_path": scope.get("path")})
        return FileResponse(self.fallback_file, media_type="text/html")
