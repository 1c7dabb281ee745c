"""Integration tests for the tool API endpoints and the chat page.

Tests GET /api/tools, POST /api/call-tool, lazy registry initialization
and GET / with a full app setup.
"""

import anyio
import pytest
from httpx import AsyncClient


class TestListTools:
    """Tests for GET /api/tools."""

    @pytest.mark.asyncio
    async def test_lists_adapted_tools(self, async_client: AsyncClient):
        """Tools are listed with their schemas stripped of unsupported keys."""
        response = await async_client.get("/api/tools")

        assert response.status_code == 200
        tools = response.json()["tools"]
        assert [tool["name"] for tool in tools] == ["add", "get_weather"]
        assert tools[0] == {
            "name": "add",
            "description": "Add two numbers",
            "parameters": {
                "type": "object",
                "properties": {"a": {"type": "number"}, "b": {"type": "number"}},
                "required": ["a", "b"],
            },
        }

    @pytest.mark.asyncio
    async def test_empty_while_tool_service_down(
        self, offline_client: AsyncClient, fake_registry, registry_settled
    ):
        """No tools are listed while the MCP server is unreachable."""
        response = await offline_client.get("/api/tools")

        assert response.status_code == 200
        assert response.json() == {"tools": []}
        await registry_settled()
        assert fake_registry.initialize_calls == 2


class TestCallTool:
    """Tests for POST /api/call-tool."""

    @pytest.mark.asyncio
    async def test_call_tool(
        self, async_client: AsyncClient, mcp_session, make_tool_result
    ):
        """The raw tool result is returned under result."""
        mcp_session.call_tool.return_value = make_tool_result("4")

        response = await async_client.post(
            "/api/call-tool", json={"name": "add", "args": {"a": 2, "b": 2}}
        )

        assert response.status_code == 200
        assert response.json() == {
            "result": {"content": [{"type": "text", "text": "4"}], "isError": False}
        }
        mcp_session.call_tool.assert_awaited_once_with("add", arguments={"a": 2, "b": 2})

    @pytest.mark.asyncio
    async def test_call_tool_without_args(self, async_client: AsyncClient, mcp_session):
        """Missing args are sent as an empty argument bag."""
        response = await async_client.post("/api/call-tool", json={"name": "get_weather"})

        assert response.status_code == 200
        mcp_session.call_tool.assert_awaited_once_with("get_weather", arguments={})

    @pytest.mark.asyncio
    async def test_tool_error_result_is_passed_through(
        self, async_client: AsyncClient, mcp_session, make_tool_result
    ):
        """A result flagged as an error by the tool is still a successful call."""
        mcp_session.call_tool.return_value = make_tool_result("city not found", True)

        response = await async_client.post(
            "/api/call-tool", json={"name": "get_weather", "args": {"city": "Atlantis"}}
        )

        assert response.status_code == 200
        assert response.json()["result"]["isError"] is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"name": ""}, {"args": {"a": 1}}])
    async def test_missing_name(self, async_client: AsyncClient, mcp_session, body):
        """A request without a tool name is rejected without calling the tool service."""
        response = await async_client.post("/api/call-tool", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Tool name must not be empty"}
        mcp_session.call_tool.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_tool(self, async_client: AsyncClient, mcp_session):
        """Names outside the tool list are rejected."""
        response = await async_client.post("/api/call-tool", json={"name": "rm_rf"})

        assert response.status_code == 500
        assert response.json() == {"error": "Unknown tool: rm_rf"}
        mcp_session.call_tool.assert_not_called()

    @pytest.mark.asyncio
    async def test_tool_service_failure(self, async_client: AsyncClient, mcp_session):
        """Transport failures become a 500 error body."""
        mcp_session.call_tool.side_effect = ConnectionError("stream closed")

        response = await async_client.post("/api/call-tool", json={"name": "add"})

        assert response.status_code == 500
        assert response.json() == {"error": "stream closed"}

    @pytest.mark.asyncio
    async def test_registry_not_ready(self, offline_client: AsyncClient, mcp_session):
        """Calling a tool while the MCP server is unreachable fails."""
        response = await offline_client.post("/api/call-tool", json={"name": "add"})

        assert response.status_code == 500
        assert response.json() == {"error": "MCP client is not initialized"}
        mcp_session.call_tool.assert_not_called()


class TestLazyInitialization:
    """Tests for connecting the registry on demand."""

    @pytest.mark.asyncio
    async def test_ready_registry_is_not_reinitialized(
        self, async_client: AsyncClient, fake_registry
    ):
        """Requests do not reconnect a registry that is already ready."""
        await async_client.get("/api/tools")
        await async_client.post("/api/call-tool", json={"name": "add"})

        assert fake_registry.initialize_calls == 1

    @pytest.mark.asyncio
    async def test_retries_until_tool_service_is_reachable(
        self, offline_client: AsyncClient, fake_registry, mcp_session, registry_settled
    ):
        """Every request starts a new attempt until one succeeds."""
        await offline_client.get("/api/tools")
        await registry_settled()
        await offline_client.get("/api/tools")
        await registry_settled()
        assert fake_registry.initialize_calls == 3

        fake_registry.fail_with = None
        await offline_client.get("/api/tools")
        await registry_settled()
        assert fake_registry.initialize_calls == 4
        assert fake_registry.is_ready is True

        response = await offline_client.post("/api/call-tool", json={"name": "add"})

        assert response.status_code == 200
        mcp_session.call_tool.assert_awaited_once()
        assert fake_registry.initialize_calls == 4

    @pytest.mark.asyncio
    async def test_closed_stream_triggers_reconnection(
        self, async_client: AsyncClient, fake_registry, mcp_session, registry_settled
    ):
        """A dropped MCP connection is noticed and the next request reconnects."""
        mcp_session.call_tool.side_effect = anyio.ClosedResourceError()

        response = await async_client.post("/api/call-tool", json={"name": "add"})

        assert response.status_code == 500
        assert response.json() == {"error": "ClosedResourceError"}
        assert fake_registry.is_ready is False

        mcp_session.call_tool.side_effect = None
        await async_client.get("/api/tools")
        await registry_settled()
        assert fake_registry.initialize_calls == 2

        response = await async_client.post("/api/call-tool", json={"name": "add"})
        assert response.status_code == 200


class TestChatPage:
    """Tests for GET /."""

    @pytest.mark.asyncio
    async def test_serves_chat_page(self, async_client: AsyncClient):
        """The bundled chat page is served as HTML."""
        response = await async_client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "/api/chat" in response.text
