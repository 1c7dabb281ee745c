"""Health check response model."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the health check endpoint.

    Attributes:
        status: Health status indicator ("ok" or "error").
        version: The version of mcp-chat-bridge.
        tool_service_connected: Whether the MCP tool registry is ready.
        tool_count: Number of tools currently available.
        ai_provider: Name of the configured AI provider.
        model: Model used for chat completions.
        ai_connected: Whether the AI provider answered a connectivity check.
    """

    status: str = Field(..., description="Health status of the service")
    version: str = Field(..., description="Version of mcp-chat-bridge")
    tool_service_connected: bool = Field(
        default=False, description="Whether the MCP tool service is connected"
    )
    tool_count: int = Field(default=0, description="Number of available tools")
    ai_provider: str | None = Field(default=None, description="Configured AI provider")
    model: str | None = Field(default=None, description="Configured model")
    ai_connected: bool | None = Field(
        default=None, description="Whether the AI provider is reachable"
    )
