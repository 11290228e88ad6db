"""Response envelopes shared by every endpoint."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class OKResponse(BaseModel):
    status: Literal["OK"] = "OK"


class ErrorResponse(BaseModel):
    status: Literal["Error"] = "Error"
    error: str
    fields: dict[str, str] | None = None


def error_body(message: str, fields: dict[str, str] | None = None) -> dict:
    return ErrorResponse(error=message, fields=fields or None).model_dump(exclude_none=True)
