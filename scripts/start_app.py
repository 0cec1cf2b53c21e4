#!/usr/bin/env python3
"""Start the API server, reporting startup failures to Logfire."""

import sys
import logfire
import uvicorn

from agora.config import Settings
from agora.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    # Configure Logfire before the app module is imported by uvicorn
    configure_logfire(settings)

    try:
        logfire.info("Starting Agora API", host=settings.host, port=settings.port)

        uvicorn.run(
            "agora.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
