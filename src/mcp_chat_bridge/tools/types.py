"""Type definitions for the tool layer.

This module contains the dataclasses passed between the tool registry, the
dispatcher and the AI provider clients.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ToolDescriptor:
    """A tool as listed by the remote tool service.

    Attributes:
        name: Tool name used for dispatch
        description: Human-readable description
        input_schema: JSON Schema describing the tool's arguments
    """

    name: str
    description: str
    input_schema: dict[str, Any]

    @staticmethod
    def from_mcp_tool(tool: Any) -> "ToolDescriptor":
        """Create a ToolDescriptor from an MCP ``Tool`` object."""
        return ToolDescriptor(
            name=tool.name,
            description=tool.description or "",
            input_schema=dict(tool.inputSchema or {}),
        )


@dataclass(frozen=True)
class FunctionDeclaration:
    """A tool in the shape AI providers expect for function calling."""

    name: str
    description: str
    parameters: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }


@dataclass
class ToolCallRequest:
    """A function call requested by the AI model."""

    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolOutcome:
    """The outcome of one dispatched tool call.

    Exactly one of ``result`` and ``error`` is meaningful: ``error`` is set
    when the call failed.
    """

    name: str
    result: Any = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{name, result}`` or ``{name, error}``."""
        if self.error is not None:
            return {"name": self.name, "error": self.error}
        return {"name": self.name, "result": serialize_result(self.result)}


def serialize_result(result: Any) -> Any:
    """Convert a tool service result into JSON-compatible data."""
    if hasattr(result, "model_dump"):
        return result.model_dump(mode="json", by_alias=True, exclude_none=True)
    return result
