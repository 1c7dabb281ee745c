"""Tool registry, schema adaptation, and dispatch layer.

This package connects to the remote MCP tool service, adapts its tool
schemas into AI function declarations, and dispatches tool calls.
"""

from mcp_chat_bridge.tools.dispatcher import ToolDispatcher
from mcp_chat_bridge.tools.registry import RegistryNotReady, RegistryReady, ToolRegistry
from mcp_chat_bridge.tools.schema import strip_schema_keys, to_function_declaration
from mcp_chat_bridge.tools.types import (
    FunctionDeclaration,
    ToolCallRequest,
    ToolDescriptor,
    ToolOutcome,
)

__all__ = [
    "FunctionDeclaration",
    "RegistryNotReady",
    "RegistryReady",
    "ToolCallRequest",
    "ToolDescriptor",
    "ToolDispatcher",
    "ToolOutcome",
    "ToolRegistry",
    "strip_schema_keys",
    "to_function_declaration",
]
