"""
Logging setup shared by services and the API entry point.
"""

import logging
import sys

from farm_roadmap.core.config import get_settings

_configured = False


def configure_logging() -> None:
    """Configure the root handler once, using LOG_LEVEL and LOG_FORMAT."""
    global _configured
    if _configured:
        return

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL),
        format=settings.LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    # SQL echo is noisy; keep it behind DEBUG.
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DEBUG else logging.WARNING
    )
    _configured = True


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger, configuring logging on first use."""
    configure_logging()
    return logging.getLogger(name)
