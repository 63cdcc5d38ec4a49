#!/usr/bin/env python3
"""Serve the Inkwell API under uvicorn."""

import sys

import logfire
import uvicorn

from inkwell.config import Settings
from inkwell.util.logging import setup_logging
from inkwell.util.observability import configure_logfire


def main() -> int:
    """Configure logging and telemetry, then run the server."""
    settings = Settings()
    setup_logging(settings)

    # Logfire has to be configured before the app module is imported
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting Inkwell API",
            host=settings.host,
            port=settings.port,
            git_sha=settings.git_sha,
        )
        uvicorn.run(
            "inkwell.interface.api.app:app",
            host="0.0.0.0",
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
