"""Logfire setup for the ranking API.

Domain services open their own spans (``rating_service.apply_comparison``,
``anchor_service.select_anchor`` ...) and emit structured events; this
module only wires the exporters and the framework instrumentation.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from encore.config import ObservabilitySettings, Settings

# Polled by load balancers; tracing it only adds noise
UNTRACED_URLS = "/health"


def should_send(observability: ObservabilitySettings) -> bool:
    """Whether spans leave the process.

    An explicit ``OBSERVABILITY__SEND_TO_LOGFIRE`` wins; otherwise sending
    is enabled exactly when a token is configured.
    """
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once, before the app is imported.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send_to_logfire = should_send(observability)

    logfire.configure(
        service_name="encore-ranking",
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token,
        console=logfire.ConsoleOptions(
            span_style="indented",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every API request except health checks.

    Headers are not captured since they carry the session cookie.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        excluded_urls=UNTRACED_URLS,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace the queries behind rating reads and compare-and-swap writes.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
