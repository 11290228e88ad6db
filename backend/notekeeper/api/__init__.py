"""API router aggregator."""
from fastapi import APIRouter

from notekeeper.api.routes import health, notes, users

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(users.router)
api_router.include_router(notes.router)

__all__ = ["api_router"]
