"""Exception hierarchy for mcp-chat-bridge.

Each exception carries the HTTP status code and machine-readable error code
the routers use when turning it into a JSON error body.
"""


class BridgeError(Exception):
    """Base class for all bridge errors."""

    status_code: int = 500
    code: str = "bridge_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(BridgeError):
    """The request is missing a required field."""

    status_code = 400
    code = "bad_request"


class RegistryInitError(BridgeError):
    """Connecting to the tool service or listing its tools failed."""

    code = "registry_init_failed"


class RegistryUninitializedError(BridgeError):
    """A tool was dispatched before the tool registry became ready."""

    code = "registry_uninitialized"

    def __init__(self, message: str = "MCP client is not initialized") -> None:
        super().__init__(message)


class UpstreamError(BridgeError):
    """An upstream service (AI provider or tool service) failed."""

    code = "upstream_error"


class ToolCallError(UpstreamError):
    """The tool service failed to execute a call."""

    code = "tool_call_failed"

    def __init__(self, name: str, message: str) -> None:
        super().__init__(message)
        self.name = name


class UnknownToolError(UpstreamError):
    """The requested tool is not in the registry's tool list."""

    code = "unknown_tool"

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name
