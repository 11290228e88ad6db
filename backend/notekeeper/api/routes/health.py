"""Liveness probe."""
from __future__ import annotations

from fastapi import APIRouter

from notekeeper.schemas.response import OKResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=OKResponse)
async def health() -> OKResponse:
    return OKResponse()
