"""CLI entry point for mcp-chat-bridge.

This module provides the command-line interface for starting the server.
It can be invoked as `mcp-chat-bridge` (via the script entry point) or
`python -m mcp_chat_bridge`.
"""

import argparse
import logging
import sys

import uvicorn

from mcp_chat_bridge import __version__, create_app
from mcp_chat_bridge.config import BridgeSettings


def main() -> None:
    """Main entry point for the mcp-chat-bridge CLI.

    Parses command-line arguments and starts the uvicorn server with the
    FastAPI application.
    """
    parser = argparse.ArgumentParser(
        prog="mcp-chat-bridge",
        description="FastAPI chat server bridging an AI model to MCP tools",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"mcp-chat-bridge {__version__}",
    )

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the server to (default: 127.0.0.1, can be set via HOST)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server to (default: 3000, can be set via PORT)",
    )

    parser.add_argument(
        "--mcp-server-url",
        type=str,
        default=None,
        help="MCP server SSE endpoint (default: http://localhost:8083/sse, can be set via MCP_SERVER_URL)",
    )

    parser.add_argument(
        "--provider",
        type=str,
        default=None,
        choices=["gemini", "ollama"],
        help="AI provider (default: gemini, can be set via AI_PROVIDER)",
    )

    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Model used for chat (default: gemini-2.0-flash, can be set via DEFAULT_MODEL)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via LOG_LEVEL)",
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development (uvicorn --reload)",
    )

    args = parser.parse_args()

    # Build settings, CLI args override environment variables
    settings_kwargs = {}
    if args.host is not None:
        settings_kwargs["host"] = args.host
    if args.port is not None:
        settings_kwargs["port"] = args.port
    if args.mcp_server_url is not None:
        settings_kwargs["mcp_server_url"] = args.mcp_server_url
    if args.provider is not None:
        settings_kwargs["ai_provider"] = args.provider
    if args.model is not None:
        settings_kwargs["default_model"] = args.model
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level

    settings = BridgeSettings(**settings_kwargs)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Create the FastAPI app
    app = create_app(settings=settings)

    # Start uvicorn
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=args.reload,
    )


if __name__ == "__main__":
    sys.exit(main())
