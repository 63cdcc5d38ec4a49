"""Logfire setup and instrumentation.

Service code reports through logfire directly:

    with logfire.span("live_thread.mount", post_id=str(post_id)):
        logfire.info("Live thread mounted", post_id=str(post_id))
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from inkwell.config import Settings

SERVICE_NAME = "inkwell-api"


def should_send(settings: Settings) -> bool:
    """Whether telemetry leaves the process.

    An explicit OBSERVABILITY__SEND_TO_LOGFIRE wins; otherwise a configured
    token turns sending on.
    """
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once at process start.

    Args:
        settings: Application settings
    """
    send = should_send(settings)
    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send,
        git_sha=settings.git_sha,
    )


def _request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
    # Live comment sockets are long-lived: tag them with the followed post
    result = {**attributes}
    scope_type = getattr(request, "scope", {}).get("type")
    result["connection"] = scope_type
    if scope_type == "http":
        result["method"] = request.method
    post_id = getattr(request, "path_params", {}).get("post_id")
    if post_id is not None:
        result["post_id"] = str(post_id)
    if request.client:
        result["client_host"] = request.client.host
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace HTTP requests and live comment WebSockets."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
        excluded_urls="/health",
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries of the repositories' engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_asyncpg() -> None:
    """Trace the raw asyncpg connection the change feed listens on."""
    logfire.instrument_asyncpg()


def instrument_httpx() -> None:
    """Trace image uploads to the object store."""
    logfire.instrument_httpx()
