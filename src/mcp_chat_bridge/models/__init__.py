"""Pydantic models for API request and response schemas.

This package contains all Pydantic models used for validating and
serializing API requests and responses across all endpoints.
"""

from mcp_chat_bridge.models.chat import (
    ChatRequest,
    ChatResponse,
    ConversationMessage,
    MessagePart,
)
from mcp_chat_bridge.models.health import HealthResponse
from mcp_chat_bridge.models.tools import (
    CallToolRequest,
    CallToolResponse,
    FunctionDeclarationModel,
    ToolListResponse,
)

__all__ = [
    "CallToolRequest",
    "CallToolResponse",
    "ChatRequest",
    "ChatResponse",
    "ConversationMessage",
    "FunctionDeclarationModel",
    "HealthResponse",
    "MessagePart",
    "ToolListResponse",
]
