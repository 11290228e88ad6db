"""Logging setup shared by the API process."""
from __future__ import annotations

import logging
import sys

from notekeeper.core.config import Settings
from notekeeper.middleware.request_id import request_id_var

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s"

_ENV_LEVELS = {
    "local": logging.DEBUG,
    "dev": logging.DEBUG,
    "prod": logging.INFO,
}


class RequestIDFilter(logging.Filter):
    """Stamp each record with the id of the request being served.

    An id passed explicitly through ``extra`` is left as is.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get()
        return True


def resolve_level(settings: Settings) -> int:
    if settings.log_level:
        return getattr(logging, settings.log_level)
    return _ENV_LEVELS.get(settings.env, logging.INFO)


def setup_logging(settings: Settings) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    logging.basicConfig(level=resolve_level(settings), handlers=[handler], force=True)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
