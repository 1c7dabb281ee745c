"""Pytest configuration and shared fixtures for mcp-chat-bridge tests.

This module provides common fixtures used across all test modules,
including test app creation, async client setup, and stand-ins for the
MCP tool service and the AI provider.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mcp.types import CallToolResult, TextContent, Tool

from mcp_chat_bridge import create_app
from mcp_chat_bridge.ai import Completion
from mcp_chat_bridge.config import BridgeSettings
from mcp_chat_bridge.errors import RegistryInitError
from mcp_chat_bridge.tools import RegistryNotReady, ToolRegistry


class FakeToolRegistry(ToolRegistry):
    """ToolRegistry whose connection is replaced by a given session and tool list."""

    def __init__(self, tools, session) -> None:
        super().__init__(server_url="http://mcp.test/sse")
        self.fake_tools = tools
        self.fake_session = session
        self.fail_with: str | None = None
        self.hang: asyncio.Event | None = None
        self.initialize_calls = 0

    async def initialize(self):
        self.initialize_calls += 1
        if self.hang is not None:
            await self.hang.wait()
        if self.fail_with is not None:
            self._state = RegistryNotReady(reason=self.fail_with)
            raise RegistryInitError(f"Failed to initialize MCP client: {self.fail_with}")
        if not self.is_ready:
            self._state = self._build_state(self.fake_session, self.fake_tools)
        return self._state

    async def close(self) -> None:
        self._state = RegistryNotReady(reason="closed")


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    """Build an MCP CallToolResult with a single text block."""
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


@pytest.fixture
def test_settings():
    """Create test settings isolated from the environment's .env file.

    Returns:
        BridgeSettings: Settings instance configured for testing.
    """
    return BridgeSettings(
        _env_file=None,
        host="127.0.0.1",
        port=3000,
        mcp_server_url="http://mcp.test/sse",
        ai_provider="gemini",
        google_api_key="test-key",
        default_model="gemini-test",
        log_level="DEBUG",
        cors_origins=["*"],
    )


@pytest.fixture
def mcp_tools():
    """Tools as listed by the MCP server."""
    return [
        Tool(
            name="add",
            description="Add two numbers",
            inputSchema={
                "$schema": "http://json-schema.org/draft-07/schema#",
                "type": "object",
                "properties": {"a": {"type": "number"}, "b": {"type": "number"}},
                "required": ["a", "b"],
                "additionalProperties": False,
            },
        ),
        Tool(
            name="get_weather",
            description="Current weather for a city",
            inputSchema={
                "type": "object",
                "properties": {"city": {"type": "string"}},
                "required": ["city"],
            },
        ),
    ]


@pytest.fixture
def mcp_session():
    """Mock MCP ClientSession."""
    session = AsyncMock()
    session.call_tool.return_value = text_result("ok")
    return session


@pytest.fixture(autouse=True)
def fake_registry(mcp_tools, mcp_session):
    """Replace the ToolRegistry created during app startup."""
    registry = FakeToolRegistry(mcp_tools, mcp_session)
    with patch("mcp_chat_bridge.app.ToolRegistry", return_value=registry):
        yield registry


@pytest.fixture(autouse=True)
def mock_ai_client():
    """Replace the AI client created during app startup."""
    client = MagicMock()
    client.provider = "gemini"
    client.model = "gemini-test"
    client.complete = AsyncMock(return_value=Completion(candidates=[["Hello!"]]))
    client.check_connection = AsyncMock(return_value=True)
    client.close = AsyncMock()
    with patch("mcp_chat_bridge.app.create_ai_client", return_value=client):
        yield client


@pytest.fixture
def test_app(test_settings):
    """Create a FastAPI test application instance.

    Args:
        test_settings: Test settings fixture.

    Returns:
        FastAPI: Configured test application.
    """
    return create_app(settings=test_settings)


@pytest_asyncio.fixture
async def async_client(test_app):
    """Create an async HTTP client for testing FastAPI endpoints.

    Args:
        test_app: Test application fixture.

    Yields:
        AsyncClient: Async HTTP client for making test requests.
    """
    # Trigger the lifespan startup manually for tests
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest.fixture
def make_tool_result():
    """Factory for MCP CallToolResult objects."""
    return text_result
