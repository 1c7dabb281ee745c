"""Provider-neutral types for AI completions."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field

from mcp_chat_bridge.models.chat import ConversationMessage
from mcp_chat_bridge.tools.types import FunctionDeclaration, ToolCallRequest


@dataclass
class Completion:
    """The result of one AI round.

    Attributes:
        tool_calls: Function calls the model wants executed
        candidates: Text parts of each candidate completion, in order
    """

    tool_calls: list[ToolCallRequest] = field(default_factory=list)
    candidates: list[list[str]] = field(default_factory=list)

    @property
    def has_tool_calls(self) -> bool:
        return len(self.tool_calls) > 0


class AIClient(ABC):
    """Interface shared by the AI provider clients."""

    provider: str = ""
    model: str = ""

    @abstractmethod
    async def complete(
        self,
        messages: Sequence[ConversationMessage],
        tools: Sequence[FunctionDeclaration] | None = None,
    ) -> Completion:
        """Send the conversation and optional tool declarations to the model.

        Provider errors propagate to the caller unchanged.
        """

    @abstractmethod
    async def check_connection(self) -> bool:
        """Return True if the provider is reachable."""

    async def close(self) -> None:
        """Release provider resources."""
