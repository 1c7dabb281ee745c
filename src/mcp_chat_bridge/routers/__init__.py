"""FastAPI routers for API endpoints.

This package contains all route handlers organized by resource type.
Each router module defines endpoints for a specific concern (health, tools, chat, UI).
"""

from mcp_chat_bridge.routers import chat, health, tools, ui

__all__ = [
    "chat",
    "health",
    "tools",
    "ui",
]
