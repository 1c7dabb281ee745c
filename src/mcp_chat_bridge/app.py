"""FastAPI application factory and lifespan management.

This module contains the create_app() factory function that creates and configures
the FastAPI application instance, including lifespan management for startup/shutdown
and router registration.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mcp_chat_bridge.ai import create_ai_client
from mcp_chat_bridge.config import BridgeSettings
from mcp_chat_bridge.errors import BridgeError, RegistryInitError
from mcp_chat_bridge.routers import chat, health, tools, ui
from mcp_chat_bridge.tools import ToolRegistry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for FastAPI application.

    The AI client and the tool registry are created once at startup and
    stored in app.state for reuse across all requests. The registry connects
    before the server accepts traffic; if that fails, requests retry the
    connection lazily.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded while the app is running.
    """
    settings: BridgeSettings = app.state.settings

    app.state.ai_client = create_ai_client(settings)
    logger.info(
        f"Initialized {settings.ai_provider} client with model: {settings.default_model}"
    )

    app.state.tool_registry = ToolRegistry(
        server_url=settings.mcp_server_url,
        transport=settings.tool_transport,
        client_name=settings.mcp_client_name,
        client_version=settings.mcp_client_version,
        timeout=settings.mcp_timeout,
        sse_read_timeout=settings.mcp_sse_read_timeout,
        ping_interval=settings.mcp_ping_interval,
    )
    try:
        await app.state.tool_registry.initialize()
    except RegistryInitError as e:
        logger.warning(f"{e} - will retry on the next request")

    yield

    # Shutdown: Clean up resources
    init_task = getattr(app.state, "registry_init_task", None)
    if init_task is not None and not init_task.done():
        init_task.cancel()
        await asyncio.wait([init_task])
    await app.state.tool_registry.close()
    await app.state.ai_client.close()
    logger.info("AI client closed")


async def bridge_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render bridge errors raised outside the route handlers as JSON."""
    status_code = exc.status_code if isinstance(exc, BridgeError) else 500
    logger.error(f"Request to {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


def create_app(settings: BridgeSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a FastAPI instance with all routers,
    middleware, and configuration applied. It can accept an optional
    settings object for testing or explicit configuration.

    Args:
        settings: Optional BridgeSettings instance. If not provided,
                  settings will be loaded from environment variables.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        from mcp_chat_bridge.dependencies import get_settings

        settings = get_settings()

    app = FastAPI(
        title="mcp-chat-bridge",
        description="Chat server bridging an AI model to MCP tools",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings in app.state for lifespan access
    app.state.settings = settings

    # Note: FastAPI's type hints for add_middleware are overly strict
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BridgeError, bridge_error_handler)

    # Register routers
    app.include_router(health.router)
    app.include_router(tools.router)
    app.include_router(chat.router)
    app.include_router(ui.router)

    return app
