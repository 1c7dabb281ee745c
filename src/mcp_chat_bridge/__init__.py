"""mcp-chat-bridge: FastAPI chat server bridging an AI model to MCP tools.

This package provides a small REST API that forwards chat messages to an AI
provider together with the tools of a remote MCP server, executes the tool
calls the model requests, and returns the model's final answer.
"""

from mcp_chat_bridge.app import create_app

__version__ = "0.1.0"

__all__ = ["create_app", "__version__"]
