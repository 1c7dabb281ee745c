"""Configuration module for mcp-chat-bridge using pydantic-settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mcp_chat_bridge.transport import TransportConfig


class BridgeSettings(BaseSettings):
    """Main configuration settings for mcp-chat-bridge.

    Settings are read from environment variables (and a local .env file)
    without a prefix, so MCP_SERVER_URL, GOOGLE_API_KEY, DEFAULT_MODEL,
    HTTPS_PROXY and PORT map directly onto the fields below.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000

    # MCP tool service
    mcp_server_url: str = "http://localhost:8083/sse"
    mcp_client_name: str = "mcp-client"
    mcp_client_version: str = "1.0.0"
    mcp_timeout: float = 5.0
    mcp_sse_read_timeout: float = 300.0
    mcp_ping_interval: float = Field(default=30.0, gt=0)

    # AI provider
    ai_provider: Literal["gemini", "ollama"] = "gemini"
    google_api_key: str = ""
    google_api_url: str | None = None
    default_model: str = "gemini-2.0-flash"
    ollama_host: str = "http://localhost:11434"

    # Forward proxy for AI calls only; tool calls always go direct
    https_proxy: str | None = None

    # Chat loop
    max_tool_rounds: int = Field(default=1, ge=1)

    # Errors
    expose_error_stack: bool = True

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def ai_transport(self) -> TransportConfig:
        """Transport used for AI provider calls."""
        return TransportConfig(proxy=self.https_proxy or None)

    @property
    def tool_transport(self) -> TransportConfig:
        """Transport used for the MCP tool service connection."""
        return TransportConfig(proxy=None)
