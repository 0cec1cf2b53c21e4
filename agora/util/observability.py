"""Tracing and structured events for the discussion engine, via Logfire.

Domain services open spans around each operation (``vote_service.apply_vote``,
``feed_service.next_page``...) and emit events with string attributes::

    logfire.info("Vote applied", target=str(target), value=value)

HTTP requests and SQL statements are traced by the instrumentation hooks
below, so services never log queries themselves.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from agora.config import ObservabilitySettings, Settings

SERVICE_NAME = "agora-engine"


def should_send(observability: ObservabilitySettings) -> bool:
    """Whether spans leave the process.

    An explicit ``send_to_logfire`` wins; otherwise having a token is enough.
    """
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process, before the app is imported."""
    send_to_logfire = should_send(settings.observability)

    options: dict[str, Any] = {
        "service_name": SERVICE_NAME,
        "service_version": settings.git_sha,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }
    if settings.observability.logfire_token:
        options["token"] = settings.observability.logfire_token

    logfire.configure(**options)
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request; the identity headers are captured with it."""
    logfire.instrument_fastapi(app, capture_headers=True)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace statements issued by the repositories on ``engine``."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.debug("SQLAlchemy instrumented", dialect=engine.dialect.name)
