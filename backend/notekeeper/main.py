"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notekeeper import models  # noqa: F401  registers tables on Base.metadata
from notekeeper.api import api_router
from notekeeper.api.errors import register_exception_handlers
from notekeeper.core.config import get_settings
from notekeeper.core.dependencies import get_token_service
from notekeeper.core.logging import setup_logging
from notekeeper.db.base import Base
from notekeeper.db.session import dispose_engine, engine
from notekeeper.middleware import AccessLogMiddleware, RequestIDMiddleware

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging(settings)
    try:
        settings.validate_for_environment()
    except ValueError:
        logger.exception("refusing to start with invalid configuration")
        raise
    # Build the signer before serving so a bad key fails at startup.
    get_token_service()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("%s started (env=%s)", settings.app_name, settings.env)

    try:
        yield
    finally:
        await dispose_engine()
        logger.info("%s stopped", settings.app_name)


app = FastAPI(title=settings.app_name, lifespan=lifespan)

# Last added runs first: request ids are assigned before access logging.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(AccessLogMiddleware)
app.add_middleware(RequestIDMiddleware)

register_exception_handlers(app)
app.include_router(api_router)
