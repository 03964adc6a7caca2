#!/usr/bin/env python3
"""Serve the ranking API with uvicorn.

Logfire and logging are configured before the app module is imported, so
failures while building the app or its container are reported too.
"""

import sys

import logfire
import uvicorn

from encore.config import Settings
from encore.util.logging import setup_logging
from encore.util.observability import configure_logfire

APP = "encore.interface.api.app:app"


def main() -> int:
    """Run the server until it exits."""
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    with logfire.span(
        "start_app", environment=settings.environment, port=settings.port
    ):
        try:
            uvicorn.run(
                APP,
                host="0.0.0.0",
                port=settings.port,
                log_level="debug" if settings.debug else "info",
                reload=settings.environment == "development" and settings.debug,
            )
        except Exception:
            logfire.exception("Ranking API failed to start")
            raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
