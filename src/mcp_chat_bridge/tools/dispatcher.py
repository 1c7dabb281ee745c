"""Tool call dispatch against the MCP tool service."""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import anyio

from mcp_chat_bridge.errors import BridgeError, ToolCallError, UnknownToolError
from mcp_chat_bridge.tools.registry import ToolRegistry, describe_error
from mcp_chat_bridge.tools.types import ToolCallRequest, ToolOutcome

logger = logging.getLogger(__name__)

# Raised by the MCP session once its transport streams are gone
CONNECTION_CLOSED_ERRORS = (
    anyio.ClosedResourceError,
    anyio.BrokenResourceError,
    anyio.EndOfStream,
)


class ToolDispatcher:
    """Forwards tool calls to the session held by a ToolRegistry."""

    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry

    async def call_tool(self, name: str, arguments: dict[str, Any] | None = None) -> Any:
        """Call a tool and return the tool service's raw result.

        Args:
            name: Name of a tool in the registry's last-fetched list
            arguments: Argument bag for the tool

        Returns:
            The MCP CallToolResult

        Raises:
            RegistryUninitializedError: If the registry is not ready
            UnknownToolError: If the tool is not in the registry
            ToolCallError: If the tool service call fails
        """
        state = self._registry.require_ready()
        if name not in state.declarations:
            raise UnknownToolError(name)

        logger.info(f"Calling MCP tool: {name}")
        try:
            result = await state.session.call_tool(name, arguments=arguments or {})
        except CONNECTION_CLOSED_ERRORS as e:
            self._registry.mark_lost(state.session, describe_error(e))
            raise ToolCallError(name, describe_error(e)) from e
        except Exception as e:
            logger.error(f"MCP tool call failed: {name}: {e}")
            raise ToolCallError(name, str(e) or type(e).__name__) from e

        logger.debug(f"Tool {name} returned: {result}")
        return result

    async def invoke(self, request: ToolCallRequest) -> ToolOutcome:
        """Call a tool, capturing failure in the outcome instead of raising."""
        try:
            result = await self.call_tool(request.name, request.arguments)
        except BridgeError as e:
            logger.warning(f"Tool call {request.name} captured as error: {e.message}")
            return ToolOutcome(name=request.name, error=e.message)
        return ToolOutcome(name=request.name, result=result)

    async def invoke_batch(self, requests: Sequence[ToolCallRequest]) -> list[ToolOutcome]:
        """Dispatch independent tool calls concurrently.

        Returns:
            One outcome per request, in request order
        """
        outcomes = await asyncio.gather(*(self.invoke(request) for request in requests))
        failed = sum(1 for outcome in outcomes if outcome.failed)
        logger.info(f"Dispatched {len(outcomes)} tool calls ({failed} failed)")
        return list(outcomes)
