#!/usr/bin/env python3
"""Upgrade the database schema to head, reporting failures to Logfire."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from agora.config import Settings
from agora.util.observability import configure_logfire


def main() -> int:
    settings = Settings()
    configure_logfire(settings)

    try:
        with logfire.span("migrations.upgrade", environment=settings.environment):
            command.upgrade(Config("alembic.ini"), "head")

        logfire.info("Database schema is up to date")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Fail the deploy rather than start on a stale schema
        raise


if __name__ == "__main__":
    sys.exit(main())
