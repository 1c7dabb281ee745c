"""AI provider clients.

This package provides async clients for the supported completion APIs.
Each client turns a conversation plus tool declarations into a Completion.
"""

from mcp_chat_bridge.ai.gemini import GeminiClient
from mcp_chat_bridge.ai.ollama import OllamaClient
from mcp_chat_bridge.ai.types import AIClient, Completion
from mcp_chat_bridge.config import BridgeSettings


def create_ai_client(settings: BridgeSettings) -> AIClient:
    """Create the AI client for the configured provider."""
    if settings.ai_provider == "ollama":
        return OllamaClient(
            host=settings.ollama_host,
            model=settings.default_model,
            transport=settings.ai_transport,
        )
    return GeminiClient(
        api_key=settings.google_api_key,
        model=settings.default_model,
        base_url=settings.google_api_url,
        transport=settings.ai_transport,
    )


__all__ = ["AIClient", "Completion", "GeminiClient", "OllamaClient", "create_ai_client"]
