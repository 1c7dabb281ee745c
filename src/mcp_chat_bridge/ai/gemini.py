"""Async Google Gemini client wrapper.

This module wraps the google-genai async client and converts between the
bridge's conversation and tool types and the Gemini API's types.
"""

import logging
from collections.abc import Sequence
from typing import Any

from google import genai
from google.genai import types

from mcp_chat_bridge.ai.types import AIClient, Completion
from mcp_chat_bridge.models.chat import ConversationMessage
from mcp_chat_bridge.tools.types import FunctionDeclaration, ToolCallRequest
from mcp_chat_bridge.transport import TransportConfig

logger = logging.getLogger(__name__)


class GeminiClient(AIClient):
    """Async client for the Gemini generateContent API.

    Attributes:
        model: The model used for every completion
        transport: Outbound transport settings (forward proxy) for API calls
        _client: The underlying genai.Client instance
    """

    provider = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        transport: TransportConfig | None = None,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            api_key: Google API key
            model: Model name (e.g., "gemini-2.0-flash")
            base_url: Optional API base URL override
            transport: Outbound transport settings
        """
        self.model = model
        self.transport = transport or TransportConfig()
        http_options = types.HttpOptions(
            base_url=base_url,
            async_client_args=self.transport.httpx_kwargs(),
        )
        self._client = genai.Client(api_key=api_key or None, http_options=http_options)
        logger.info(
            f"GeminiClient initialized with model: {model} "
            f"(proxy: {self.transport.proxy or 'direct'})"
        )

    async def complete(
        self,
        messages: Sequence[ConversationMessage],
        tools: Sequence[FunctionDeclaration] | None = None,
    ) -> Completion:
        """Run one generateContent round.

        Args:
            messages: Conversation so far, including the newest user message
            tools: Function declarations to attach; None or empty attaches none

        Returns:
            Completion: Requested function calls and candidate text parts
        """
        contents = [to_gemini_content(message) for message in messages]
        config = None
        if tools:
            config = types.GenerateContentConfig(
                tools=[
                    types.Tool(
                        function_declarations=[
                            to_gemini_declaration(tool) for tool in tools
                        ]
                    )
                ]
            )

        logger.debug(
            f"Calling Gemini model {self.model} with {len(contents)} messages "
            f"and {len(tools or [])} tools"
        )
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=contents,
            config=config,
        )
        return to_completion(response)

    async def check_connection(self) -> bool:
        """Check that the configured model can be fetched."""
        try:
            await self._client.aio.models.get(model=self.model)
            logger.debug("Gemini connection check: successful")
            return True
        except Exception as e:
            logger.warning(f"Gemini connection check failed: {e}")
            return False

    async def close(self) -> None:
        """Close the underlying async HTTP session."""
        await self._client.aio.aclose()


def to_gemini_content(message: ConversationMessage) -> types.Content:
    """Convert a conversation message to a Gemini Content."""
    role = "user" if message.role == "user" else "model"
    return types.Content(
        role=role,
        parts=[types.Part(text=part.text) for part in message.parts],
    )


def to_gemini_declaration(tool: FunctionDeclaration) -> types.FunctionDeclaration:
    """Convert a function declaration to Gemini's type."""
    return types.FunctionDeclaration(
        name=tool.name,
        description=tool.description,
        parameters_json_schema=tool.parameters,
    )


def to_completion(response: Any) -> Completion:
    """Convert a GenerateContentResponse into a Completion."""
    tool_calls = [
        ToolCallRequest(name=call.name or "", arguments=dict(call.args or {}))
        for call in response.function_calls or []
    ]

    candidates: list[list[str]] = []
    for candidate in response.candidates or []:
        content = candidate.content
        parts = content.parts if content is not None and content.parts else []
        candidates.append([part.text or "" for part in parts])

    return Completion(tool_calls=tool_calls, candidates=candidates)
