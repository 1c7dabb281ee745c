"""Conversation assembly for AI rounds."""

import json
from collections.abc import Sequence

from mcp_chat_bridge.models.chat import ConversationMessage
from mcp_chat_bridge.tools.types import ToolOutcome


def build_conversation(
    history: Sequence[ConversationMessage],
    message: str,
) -> list[ConversationMessage]:
    """Append the new user message to the prior history."""
    return [*history, ConversationMessage.user(message)]


def serialize_outcomes(outcomes: Sequence[ToolOutcome]) -> str:
    """Serialize tool outcomes into the JSON text sent back to the model."""
    return json.dumps(
        [outcome.to_dict() for outcome in outcomes],
        ensure_ascii=False,
        default=str,
    )


def append_tool_results(
    messages: Sequence[ConversationMessage],
    outcomes: Sequence[ToolOutcome],
) -> list[ConversationMessage]:
    """Append a user message carrying the serialized tool outcomes."""
    return [*messages, ConversationMessage.user(serialize_outcomes(outcomes))]
