"""Standard library logging for uvicorn, alembic and asyncpg.

Application code logs through logfire; this only governs the third-party
loggers and, when telemetry is sent, forwards their records to logfire too.
"""

import logging
import sys

import logfire

from inkwell.config import Settings
from inkwell.util.observability import should_send

QUIET_LOGGERS = ("httpx", "httpcore", "asyncpg", "sqlalchemy.engine")


def setup_logging(settings: Settings) -> None:
    """Configure root logging for the process.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if should_send(settings):
        handlers.append(logfire.LogfireLoggingHandler())

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # Disconnects of live comment sockets are routine
    logging.getLogger("uvicorn.error").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured for %s at %s",
        settings.environment,
        logging.getLevelName(level),
    )
