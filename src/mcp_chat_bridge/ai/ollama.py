"""Async Ollama client wrapper.

This module provides an async wrapper around the ollama.AsyncClient for
running chat completions with tool declarations against a local Ollama
server. The client is created once at startup and reused.
"""

import logging
from collections.abc import Sequence
from typing import Any

import ollama

from mcp_chat_bridge.ai.types import AIClient, Completion
from mcp_chat_bridge.models.chat import ConversationMessage
from mcp_chat_bridge.tools.types import FunctionDeclaration, ToolCallRequest
from mcp_chat_bridge.transport import TransportConfig

logger = logging.getLogger(__name__)


def _get_value(obj: Any, key: str, default: Any = None) -> Any:
    """Get a value from either an object attribute or a dict key."""
    if isinstance(obj, dict):
        return obj.get(key, default)
    if hasattr(obj, key):
        return getattr(obj, key, default)
    return default


class OllamaClient(AIClient):
    """Async client for the Ollama chat API.

    Attributes:
        host: The Ollama server URL (e.g., "http://localhost:11434")
        model: The model used for every completion
        _client: The underlying ollama.AsyncClient instance
    """

    provider = "ollama"

    def __init__(
        self,
        host: str,
        model: str,
        transport: TransportConfig | None = None,
    ) -> None:
        """Initialize the Ollama client.

        Args:
            host: The Ollama server URL
            model: Model name (e.g., "llama3.2:latest")
            transport: Outbound transport settings
        """
        self.host = host
        self.model = model
        self.transport = transport or TransportConfig()
        self._client = ollama.AsyncClient(host=host, **self.transport.httpx_kwargs())
        logger.info(f"OllamaClient initialized with host: {host}, model: {model}")

    async def complete(
        self,
        messages: Sequence[ConversationMessage],
        tools: Sequence[FunctionDeclaration] | None = None,
    ) -> Completion:
        """Run one non-streaming chat round.

        Args:
            messages: Conversation so far, including the newest user message
            tools: Function declarations to attach; None or empty attaches none

        Returns:
            Completion: Requested tool calls and the single candidate's text
        """
        ollama_messages = [to_ollama_message(message) for message in messages]
        ollama_tools = [to_ollama_tool(tool) for tool in tools] if tools else None

        logger.debug(
            f"Calling Ollama model {self.model} with {len(ollama_messages)} messages "
            f"and {len(ollama_tools or [])} tools"
        )
        response = await self._client.chat(
            model=self.model,
            messages=ollama_messages,
            tools=ollama_tools,
            stream=False,
        )

        message = _get_value(response, "message", {})
        content = _get_value(message, "content", "") or ""

        tool_calls = []
        for call in _get_value(message, "tool_calls", None) or []:
            function = _get_value(call, "function", {})
            tool_calls.append(
                ToolCallRequest(
                    name=_get_value(function, "name", "") or "",
                    arguments=dict(_get_value(function, "arguments", None) or {}),
                )
            )

        return Completion(tool_calls=tool_calls, candidates=[[content]])

    async def check_connection(self) -> bool:
        """Check if the Ollama server is reachable.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            # Try to list models as a connectivity check
            await self._client.list()
            logger.debug("Ollama connection check: successful")
            return True
        except Exception as e:
            logger.warning(f"Ollama connection check failed: {e}")
            return False


def to_ollama_message(message: ConversationMessage) -> dict[str, Any]:
    """Convert a conversation message to Ollama's message format."""
    role = "user" if message.role == "user" else "assistant"
    return {"role": role, "content": message.text}


def to_ollama_tool(tool: FunctionDeclaration) -> dict[str, Any]:
    """Convert a function declaration to Ollama's tool format."""
    return {"type": "function", "function": tool.to_dict()}
