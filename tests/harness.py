"""Test harness for unit, integration and E2E tests.

Unmocked components assume their services are already running (postgres via
docker compose). Settings are loaded from environment variables.
"""

import pytest_asyncio
from fastapi import FastAPI

from inkwell.interface.api.app import create_app
from inkwell.util.di import Component
from inkwell.util.di.container import setup_di
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a fresh test container with specified unmocking
    - Yields a request-scoped container for service access
    - Closes the container afterwards

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no docker needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_post(unit_env):
            post_service = await unit_env.get(PostService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def create_test_app(unmock: set[Component] | None = None) -> FastAPI:
    """FastAPI app wired to a fresh test container.

    The app's lifespan closes the container, so use the TestClient as a
    context manager.
    """
    app_instance = create_app()
    setup_di(app_instance, build_test_container(unmock=unmock or set()))
    return app_instance
