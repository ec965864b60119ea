#!/usr/bin/env python3
"""Start the Reel API under uvicorn, reporting startup failures to Logfire."""

import sys
import logfire
import uvicorn

from reel.config import Settings
from reel.util.logging import setup_logging
from reel.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting Reel API",
            host=settings.api.host,
            port=settings.api.port,
            git_sha=settings.git_sha,
        )
        uvicorn.run(
            "reel.interface.api.app:app",
            host=settings.api.host,
            port=settings.api.port,
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
