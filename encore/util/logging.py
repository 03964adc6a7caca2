"""Logging configuration for the application."""

import logging
import sys

from encore.config import Settings

# Libraries that log every statement or request at INFO
NOISY_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "asyncio")


def setup_logging(settings: Settings) -> None:
    """Configure plain stdlib logging.

    Structured events go through Logfire; this covers uvicorn, SQLAlchemy
    and Alembic, which log through the standard library.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        stream=sys.stdout,
        force=True,
    )

    # SQL echo is already controlled by the engine in debug mode
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if settings.debug else logging.WARNING)

    logging.getLogger("encore").setLevel(level)
    logging.getLogger(__name__).info(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
