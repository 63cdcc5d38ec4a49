"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from inkwell.util.di import build_providers


def create_container() -> AsyncContainer:
    """Build the production container. Settings come from the environment."""
    # FastapiProvider exposes the Request to REQUEST-scoped providers
    return make_async_container(*build_providers(), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to a FastAPI app.

    The container is stored on ``app.state.dishka_container``; WebSocket
    handlers open their own scopes from it.
    """
    setup_dishka(container, app)
