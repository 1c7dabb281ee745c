"""MCP tool registry.

This module owns the connection to the remote MCP tool service. The SSE
transport and the MCP client session are async context managers that must be
entered and exited by the same task, so the connection lives in a dedicated
background task for as long as the registry is ready.
"""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from mcp import ClientSession
from mcp.client.sse import sse_client
from mcp.types import Implementation

from mcp_chat_bridge.errors import RegistryInitError, RegistryUninitializedError
from mcp_chat_bridge.tools.schema import UNSUPPORTED_SCHEMA_KEYS, to_function_declaration
from mcp_chat_bridge.tools.types import FunctionDeclaration, ToolDescriptor
from mcp_chat_bridge.transport import TransportConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryReady:
    """Registry state once connected and the tool list has been fetched."""

    session: Any
    tools: tuple[ToolDescriptor, ...]
    declarations: dict[str, FunctionDeclaration] = field(default_factory=dict)


@dataclass(frozen=True)
class RegistryNotReady:
    """Registry state before a successful connection, or after losing it."""

    reason: str


RegistryState = RegistryReady | RegistryNotReady


def describe_error(error: BaseException) -> str:
    """Return a readable message, unwrapping task-group exception groups."""
    while isinstance(error, BaseExceptionGroup) and error.exceptions:
        error = error.exceptions[0]
    return str(error) or type(error).__name__


class ToolRegistry:
    """Connection to the MCP tool service and its adapted tool list.

    While ready, the connection is pinged every ``ping_interval`` seconds. A
    failed ping, or a dispatcher reporting a closed stream, moves the registry
    back to RegistryNotReady so the next initialize reconnects.

    Attributes:
        server_url: SSE endpoint of the MCP server
        transport: Outbound transport settings for the connection
    """

    def __init__(
        self,
        server_url: str,
        transport: TransportConfig | None = None,
        client_name: str = "mcp-client",
        client_version: str = "1.0.0",
        timeout: float = 5.0,
        sse_read_timeout: float = 300.0,
        ping_interval: float = 30.0,
        disallowed_keys: Iterable[str] = UNSUPPORTED_SCHEMA_KEYS,
    ) -> None:
        self.server_url = server_url
        self.transport = transport or TransportConfig()
        self._client_info = Implementation(name=client_name, version=client_version)
        self._timeout = timeout
        self._sse_read_timeout = sse_read_timeout
        self._ping_interval = ping_interval
        self._disallowed_keys = frozenset(disallowed_keys)

        self._state: RegistryState = RegistryNotReady(reason="not initialized")
        self._lock = asyncio.Lock()
        self._connection: asyncio.Task[None] | None = None
        self._ready: asyncio.Future[RegistryReady] | None = None
        self._shutdown = asyncio.Event()

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return isinstance(self._state, RegistryReady)

    @property
    def declarations(self) -> list[FunctionDeclaration]:
        """Adapted function declarations, empty while not ready."""
        if isinstance(self._state, RegistryReady):
            return list(self._state.declarations.values())
        return []

    def require_ready(self) -> RegistryReady:
        """Return the ready state or raise RegistryUninitializedError."""
        if isinstance(self._state, RegistryReady):
            return self._state
        raise RegistryUninitializedError()

    def mark_lost(self, session: Any, reason: str) -> None:
        """Drop the ready state if it still belongs to ``session``.

        The connection task is told to shut down; the next initialize
        reconnects.
        """
        if not isinstance(self._state, RegistryReady) or self._state.session is not session:
            return
        logger.warning(f"MCP connection lost: {reason}")
        self._state = RegistryNotReady(reason=reason)
        self._shutdown.set()

    async def initialize(self) -> RegistryReady:
        """Connect to the tool service and fetch its tools.

        Calling this while already ready is a no-op. Concurrent callers wait
        for the same connection attempt.

        Returns:
            RegistryReady: The ready state

        Raises:
            RegistryInitError: If connecting or listing tools fails
        """
        async with self._lock:
            if isinstance(self._state, RegistryReady):
                return self._state

            await self._stop_connection()
            logger.info(f"Connecting to MCP server at {self.server_url}")

            ready: asyncio.Future[RegistryReady] = (
                asyncio.get_running_loop().create_future()
            )
            self._ready = ready
            self._shutdown = asyncio.Event()
            self._connection = asyncio.create_task(
                self._run_connection(ready, self._shutdown)
            )

            try:
                state = await ready
            except asyncio.CancelledError:
                # Nobody waits for this attempt any more
                self._connection.cancel()
                self._connection = None
                raise
            except Exception as e:
                reason = describe_error(e)
                self._state = RegistryNotReady(reason=reason)
                self._connection = None
                logger.error(f"Failed to initialize MCP client: {reason}")
                raise RegistryInitError(
                    f"Failed to initialize MCP client: {reason}"
                ) from e

            self._state = state
            logger.info(f"MCP client initialized with {len(state.tools)} tools")
            return state

    async def refresh(self) -> RegistryReady:
        """Re-list tools over the existing connection.

        Raises:
            RegistryUninitializedError: If the registry is not ready
        """
        async with self._lock:
            current = self.require_ready()
            listing = await current.session.list_tools()
            self._state = self._build_state(current.session, listing.tools)
            logger.info(f"Refreshed MCP tool list: {len(self._state.tools)} tools")
            return self._state

    async def close(self) -> None:
        """Close the connection to the tool service."""
        async with self._lock:
            await self._stop_connection()
            self._state = RegistryNotReady(reason="closed")
            logger.info("MCP client closed")

    def _build_state(self, session: Any, mcp_tools: Iterable[Any]) -> RegistryReady:
        tools = tuple(ToolDescriptor.from_mcp_tool(tool) for tool in mcp_tools)
        declarations = {
            tool.name: to_function_declaration(tool, self._disallowed_keys)
            for tool in tools
        }
        return RegistryReady(session=session, tools=tools, declarations=declarations)

    async def _run_connection(
        self,
        ready: "asyncio.Future[RegistryReady]",
        shutdown: asyncio.Event,
    ) -> None:
        session = None
        try:
            async with sse_client(
                self.server_url,
                timeout=self._timeout,
                sse_read_timeout=self._sse_read_timeout,
                httpx_client_factory=self.transport.mcp_client_factory(),
            ) as (read_stream, write_stream):
                async with ClientSession(
                    read_stream, write_stream, client_info=self._client_info
                ) as session:
                    await session.initialize()
                    listing = await session.list_tools()
                    if ready.done():
                        # The caller gave up waiting
                        return
                    ready.set_result(self._build_state(session, listing.tools))
                    await self._watch_connection(session, shutdown)
        except Exception as e:
            if not ready.done():
                ready.set_exception(e)
                return
            if shutdown.is_set():
                logger.debug(f"MCP connection closed with error: {describe_error(e)}")
                return
            self.mark_lost(session, describe_error(e))

    async def _watch_connection(self, session: Any, shutdown: asyncio.Event) -> None:
        """Ping the server until shutdown; a failed or unanswered ping raises."""
        while not shutdown.is_set():
            try:
                await asyncio.wait_for(shutdown.wait(), timeout=self._ping_interval)
            except TimeoutError:
                await asyncio.wait_for(session.send_ping(), timeout=self._timeout)

    async def _stop_connection(self) -> None:
        task = self._connection
        if task is None:
            return
        self._connection = None
        if self._ready is not None and not self._ready.done():
            # Still connecting, the shutdown event is only watched once ready
            task.cancel()
        self._shutdown.set()

        done, _ = await asyncio.wait([task], timeout=self._timeout)
        if not done:
            logger.warning("MCP connection did not close in time, cancelling it")
            task.cancel()
            await asyncio.wait([task])
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"MCP connection task ended with error: {task.exception()}")
