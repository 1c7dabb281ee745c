"""Health check endpoint router."""

import logging

from fastapi import APIRouter, Request

from mcp_chat_bridge.ai import AIClient
from mcp_chat_bridge.models.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint.

    Returns the current health status and version of the bridge, whether
    the MCP tool service is connected, and whether the AI provider answers.

    Args:
        request: The FastAPI request object.

    Returns:
        HealthResponse: Health status and version information.
    """
    tool_service_connected = False
    tool_count = 0
    if hasattr(request.app.state, "tool_registry"):
        registry = request.app.state.tool_registry
        tool_service_connected = registry.is_ready
        tool_count = len(registry.declarations)

    ai_provider = None
    model = None
    ai_connected = None
    if hasattr(request.app.state, "ai_client"):
        ai_client: AIClient = request.app.state.ai_client
        ai_provider = ai_client.provider
        model = ai_client.model

        try:
            ai_connected = await ai_client.check_connection()
            logger.debug(f"AI connectivity check: {ai_connected}")
        except Exception as e:
            logger.warning(f"AI connectivity check failed: {e}")
            ai_connected = False

    return HealthResponse(
        status="ok",
        version="0.1.0",
        tool_service_connected=tool_service_connected,
        tool_count=tool_count,
        ai_provider=ai_provider,
        model=model,
        ai_connected=ai_connected,
    )
