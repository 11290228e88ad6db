"""Per-request access logging."""
from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("notekeeper.access")

_QUIET_PATHS = {"/health"}


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of each request.

    Only the path is logged, never headers or bodies, so tokens and passwords
    stay out of the logs.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in _QUIET_PATHS:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        status = response.status_code
        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        client = request.client.host if request.client else "unknown"
        logger.log(level, "%s %s %d %.1fms from %s", request.method, request.url.path, status, duration_ms, client)
        return response
