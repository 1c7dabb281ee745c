"""Business logic services for mcp-chat-bridge.

This package contains the chat orchestration loop together with the
conversation assembly and response formatting it relies on.
"""

from mcp_chat_bridge.services.chat import ChatResult, ChatService, ChatState
from mcp_chat_bridge.services.conversation import append_tool_results, build_conversation
from mcp_chat_bridge.services.formatting import format_response

__all__ = [
    "ChatResult",
    "ChatService",
    "ChatState",
    "append_tool_results",
    "build_conversation",
    "format_response",
]
