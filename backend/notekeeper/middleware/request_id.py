"""Middleware assigning a correlation id to every request."""
from __future__ import annotations

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


def current_request_id(request: Request) -> str:
    """Id assigned to ``request``, also readable after the middleware has unwound."""

    return getattr(request.state, "request_id", None) or request_id_var.get()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuse the client's X-Request-ID or generate a short one, and echo it back."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
