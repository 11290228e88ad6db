"""Exception handlers rendering every failure in the error envelope."""
from __future__ import annotations

import logging
from typing import Any, Iterable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notekeeper.core.errors import InternalError, NotekeeperError, ValidationError
from notekeeper.middleware.request_id import REQUEST_ID_HEADER, current_request_id
from notekeeper.schemas.response import error_body

logger = logging.getLogger(__name__)

_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def _field_name(loc: Iterable[Any]) -> str | None:
    names = [str(part) for part in loc if isinstance(part, str) and part not in _LOCATIONS]
    return ".".join(names) or None


def _field_message(name: str, error: dict[str, Any]) -> str:
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}
    if kind == "missing" or (kind == "string_too_short" and ctx.get("min_length") == 1):
        return f"field {name} is a required field"
    if kind == "string_too_short":
        return f"field {name} must be at least {ctx.get('min_length')} characters"
    if kind == "string_too_long":
        return f"field {name} must be at most {ctx.get('max_length')} characters"
    return f"field {name} is not valid"


def validation_fields(errors: Iterable[dict[str, Any]]) -> tuple[str, dict[str, str]]:
    """Collapse pydantic errors into one message plus per-field messages."""

    fields: dict[str, str] = {}
    for error in errors:
        if error.get("type") == "json_invalid":
            return "failed to decode request", {}
        name = _field_name(error.get("loc", ()))
        if name is None:
            return "invalid request", {}
        fields.setdefault(name, _field_message(name, error))
    return ", ".join(fields.values()) or "invalid request", fields


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotekeeperError)
    async def handle_app_error(request: Request, exc: NotekeeperError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s | context=%s", request.method, request.url.path, exc.message, exc.context)
            message = InternalError.default_message
        else:
            logger.info("%s %s -> %d %s | context=%s", request.method, request.url.path, exc.status_code, exc.message, exc.context)
            message = exc.message
        fields = exc.fields if isinstance(exc, ValidationError) else None
        return JSONResponse(status_code=exc.status_code, content=error_body(message, fields))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        message, fields = validation_fields(exc.errors())
        return await handle_app_error(request, ValidationError(message, fields))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        # Runs outside RequestIDMiddleware, so the id comes from request state.
        rid = current_request_id(request)
        logger.error(
            "unexpected error on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
            extra={"request_id": rid},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(InternalError.default_message),
            headers={REQUEST_ID_HEADER: rid},
        )
