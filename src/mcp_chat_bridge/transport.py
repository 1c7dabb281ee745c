"""Per-client outbound transport configuration.

Every outbound client (AI provider, MCP tool service) receives its own
TransportConfig at construction time. Proxy selection is therefore a property
of the client, not of the process, and concurrent requests can never observe
each other's proxy choice.
"""

from dataclasses import dataclass
from typing import Any

import httpx


@dataclass(frozen=True)
class TransportConfig:
    """Outbound HTTP settings for a single client.

    Attributes:
        proxy: Forward proxy URL, or None for a direct connection
        trust_env: Whether httpx may pick up proxy settings from the environment
    """

    proxy: str | None = None
    trust_env: bool = False

    @property
    def is_direct(self) -> bool:
        """True when no forward proxy is configured."""
        return self.proxy is None

    def httpx_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for constructing an httpx client."""
        kwargs: dict[str, Any] = {"trust_env": self.trust_env}
        if self.proxy:
            kwargs["proxy"] = self.proxy
        return kwargs

    def mcp_client_factory(self):
        """Build an httpx client factory for the MCP SSE transport.

        The returned callable matches the signature the MCP client expects
        from ``httpx_client_factory``.
        """

        def factory(
            headers: dict[str, str] | None = None,
            timeout: httpx.Timeout | None = None,
            auth: httpx.Auth | None = None,
        ) -> httpx.AsyncClient:
            return httpx.AsyncClient(
                headers=headers,
                timeout=timeout if timeout is not None else httpx.Timeout(30.0),
                auth=auth,
                follow_redirects=True,
                **self.httpx_kwargs(),
            )

        return factory
