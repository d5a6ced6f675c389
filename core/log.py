"""Rotating file loggers shared by the dashboard services."""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from core.settings import LOGGING


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def get_logger(name: str, *, log_path: Optional[Path] = None) -> logging.Logger:
    """Return ``dashboard.<name>`` with a rotating file handler attached once."""

    logger = logging.getLogger(f"dashboard.{name}")
    if not logger.handlers:
        path = Path(log_path or LOGGING.directory / LOGGING.filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path,
            maxBytes=LOGGING.max_bytes,
            backupCount=LOGGING.backup_count,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(LOGGING.level)
    return logger


__all__ = ["LOG_FORMAT", "get_logger"]
