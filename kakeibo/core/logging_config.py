"""Centralized logging configuration for the web app and the batch job."""
from __future__ import annotations

import logging
import logging.handlers
import os
import time
from typing import Optional

from kakeibo.core.config import settings

LOG_FORMAT = "%(asctime)sZ | %(levelname)s | %(name)s | %(message)s"


def setup_logging(log_file: str = "app.log", level: Optional[str] = None) -> None:
    """Send every logger to ``LOG_DIR/<log_file>`` and stderr, timestamps in UTC.

    The web app writes ``app.log``; the recurring job passes its own file
    name so cron runs are kept apart from request logs.
    """
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)

    os.makedirs(settings.LOG_DIR, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    logging.Formatter.converter = time.gmtime

    file_handler = logging.handlers.RotatingFileHandler(
        os.path.join(settings.LOG_DIR, log_file),
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [file_handler, stream_handler]

    logging.getLogger("kakeibo").setLevel(log_level)

    # SQL echo is controlled by DEBUG on the engine, not by LOG_LEVEL.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(log_level)


__all__ = ["LOG_FORMAT", "setup_logging"]
