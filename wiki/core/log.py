"""Logging setup for the wiki process."""

from __future__ import annotations

import logging

from .config import get_settings

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"


def configure_logging(level: str | None = None) -> logging.Logger:
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, level or settings.log_level, logging.INFO), format=LOG_FORMAT)
    return logging.getLogger("wiki")
