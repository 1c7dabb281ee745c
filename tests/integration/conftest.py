"""Pytest configuration for integration tests.

This module provides integration-test-specific fixtures for running the
API against a tool service that is unreachable at startup, and for waiting
on the background reconnection that requests start.
"""

import asyncio

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def offline_client(test_app, fake_registry):
    """Async client for an app whose MCP server refused the startup connection.

    The registry keeps failing until the test clears ``fake_registry.fail_with``.

    Yields:
        AsyncClient: Async HTTP client for making test requests.
    """
    fake_registry.fail_with = "connection refused"

    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest.fixture
def registry_settled(test_app):
    """Return a coroutine function that waits for the background reconnection."""

    async def wait() -> None:
        task = getattr(test_app.state, "registry_init_task", None)
        if task is not None:
            await asyncio.wait([task])

    return wait
