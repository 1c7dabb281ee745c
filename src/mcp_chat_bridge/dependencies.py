"""Dependency injection providers for FastAPI endpoints.

This module provides FastAPI dependency functions that are used across
multiple routers to inject settings, the tool registry, the AI client and
the chat service.
"""

import asyncio
import logging
from functools import lru_cache

from fastapi import Request

from mcp_chat_bridge.ai import AIClient
from mcp_chat_bridge.config import BridgeSettings
from mcp_chat_bridge.errors import RegistryInitError, RegistryUninitializedError, UpstreamError
from mcp_chat_bridge.services import ChatService
from mcp_chat_bridge.tools import ToolDispatcher, ToolRegistry

logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> BridgeSettings:
    """Get the application settings instance.

    This function is cached so that the same settings instance is reused
    across all requests. Settings are loaded from environment variables
    and the local .env file.

    Returns:
        BridgeSettings: The application configuration settings.
    """
    return BridgeSettings()


def get_tool_registry(request: Request) -> ToolRegistry:
    """Get the tool registry created during application startup.

    Raises:
        RegistryUninitializedError: If the registry was never created.
    """
    if not hasattr(request.app.state, "tool_registry"):
        raise RegistryUninitializedError("Tool registry not created")
    return request.app.state.tool_registry


def get_ai_client(request: Request) -> AIClient:
    """Get the AI client created during application startup.

    Raises:
        UpstreamError: If the AI client was never created.
    """
    if not hasattr(request.app.state, "ai_client"):
        raise UpstreamError("AI client not initialized")
    return request.app.state.ai_client


def get_tool_dispatcher(request: Request) -> ToolDispatcher:
    """Get a ToolDispatcher bound to the application's tool registry."""
    return ToolDispatcher(get_tool_registry(request))


def get_chat_service(request: Request) -> ChatService:
    """Get a ChatService instance with app configuration.

    Creates a new ChatService for each request, using the AI client and
    tool registry from app state and the tool round limit from settings.
    """
    settings: BridgeSettings = request.app.state.settings
    registry = get_tool_registry(request)
    return ChatService(
        ai_client=get_ai_client(request),
        registry=registry,
        dispatcher=ToolDispatcher(registry),
        max_tool_rounds=settings.max_tool_rounds,
    )


def _log_registry_init(task: "asyncio.Task[object]") -> None:
    """Done-callback for background registry initialization."""
    if task.cancelled():
        logger.debug("Lazy MCP initialization cancelled")
        return
    error = task.exception()
    if isinstance(error, RegistryInitError):
        logger.warning(f"Lazy MCP initialization failed, continuing without tools: {error}")
    elif error is not None:
        logger.error(f"Lazy MCP initialization crashed: {error}")


async def ensure_tool_registry(request: Request) -> None:
    """Start connecting the tool registry in the background if it is not ready.

    The request never waits for the connection: it proceeds with whatever
    tools are available now, and later requests see the tools once the
    background attempt succeeds. At most one attempt runs at a time; it is
    kept on app.state as ``registry_init_task``.
    """
    registry = getattr(request.app.state, "tool_registry", None)
    if registry is None or registry.is_ready:
        return

    pending = getattr(request.app.state, "registry_init_task", None)
    if pending is not None and not pending.done():
        return

    logger.info("MCP client not ready, reconnecting in the background")
    task = asyncio.create_task(registry.initialize())
    task.add_done_callback(_log_registry_init)
    request.app.state.registry_init_task = task
