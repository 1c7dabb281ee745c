"""JSON Schema adaptation for AI function-calling interfaces.

Tool services describe their arguments with full JSON Schema, while AI
providers accept only a subset of it. This module removes the keys the
providers reject.
"""

from collections.abc import Iterable
from typing import Any

from mcp_chat_bridge.tools.types import FunctionDeclaration, ToolDescriptor

UNSUPPORTED_SCHEMA_KEYS: frozenset[str] = frozenset({"additionalProperties", "$schema"})


def strip_schema_keys(
    value: Any,
    disallowed: Iterable[str] = UNSUPPORTED_SCHEMA_KEYS,
) -> Any:
    """Return a copy of ``value`` with disallowed keys removed at every depth.

    Objects are rebuilt without the disallowed keys, arrays are rebuilt
    element by element, and anything else is returned unchanged. The input
    is never mutated.

    Args:
        value: A JSON-Schema-like value (dict, list or scalar)
        disallowed: Keys to remove wherever they appear in an object

    Returns:
        The filtered copy
    """
    disallowed = frozenset(disallowed)
    return _strip(value, disallowed)


def _strip(value: Any, disallowed: frozenset[str]) -> Any:
    if isinstance(value, dict):
        return {
            key: _strip(item, disallowed)
            for key, item in value.items()
            if key not in disallowed
        }
    if isinstance(value, list):
        return [_strip(item, disallowed) for item in value]
    return value


def to_function_declaration(
    tool: ToolDescriptor,
    disallowed: Iterable[str] = UNSUPPORTED_SCHEMA_KEYS,
) -> FunctionDeclaration:
    """Adapt a tool descriptor into a function declaration."""
    return FunctionDeclaration(
        name=tool.name,
        description=tool.description,
        parameters=strip_schema_keys(tool.input_schema, disallowed),
    )
