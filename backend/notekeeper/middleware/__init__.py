"""Starlette middleware for request correlation and access logging."""
from .access_log import AccessLogMiddleware
from .request_id import REQUEST_ID_HEADER, RequestIDMiddleware, current_request_id, request_id_var

__all__ = [
    "AccessLogMiddleware",
    "REQUEST_ID_HEADER",
    "RequestIDMiddleware",
    "current_request_id",
    "request_id_var",
]
