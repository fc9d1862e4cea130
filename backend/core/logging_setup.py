"""Process-wide logging configuration."""

import logging

from core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = None) -> None:
    """Configure the root logger once. Safe to call repeatedly."""
    level_name = (level or settings.log_level or "INFO").upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
    logging.getLogger("homekeep").setLevel(getattr(logging, level_name, logging.INFO))
    # SQL echo is controlled by DEBUG through the engine, keep the pool quiet
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
