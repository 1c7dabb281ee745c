"""Chat orchestration.

One chat turn sends the conversation and the available tools to the model,
dispatches any function calls it requests, folds the outcomes back into the
conversation, and asks the model for the final answer.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from mcp_chat_bridge.ai.types import AIClient
from mcp_chat_bridge.errors import BadRequestError
from mcp_chat_bridge.models.chat import ConversationMessage
from mcp_chat_bridge.services.conversation import append_tool_results, build_conversation
from mcp_chat_bridge.services.formatting import format_response
from mcp_chat_bridge.tools.dispatcher import ToolDispatcher
from mcp_chat_bridge.tools.registry import ToolRegistry
from mcp_chat_bridge.tools.types import ToolOutcome

logger = logging.getLogger(__name__)


class ChatState(str, Enum):
    """States a chat turn passes through."""

    AWAITING_INPUT = "awaiting_input"
    AI_ROUND_1 = "ai_round_1"
    DISPATCHING_TOOLS = "dispatching_tools"
    AI_ROUND_2 = "ai_round_2"
    DONE = "done"


@dataclass
class ChatResult:
    """Outcome of a chat turn.

    Attributes:
        response: Final answer text
        tool_calls: Outcome of every dispatched tool call, in request order
        states: States visited, from AWAITING_INPUT to DONE
    """

    response: str
    tool_calls: list[ToolOutcome] = field(default_factory=list)
    states: list[ChatState] = field(default_factory=list)


class ChatService:
    """Runs chat turns against an AI client and the MCP tool registry.

    ``max_tool_rounds`` bounds how many times tool calls are dispatched per
    turn. With the default of 1, tool calls requested by the follow-up round
    are not dispatched. The last allowed round is always sent without tool
    declarations.
    """

    def __init__(
        self,
        ai_client: AIClient,
        registry: ToolRegistry,
        dispatcher: ToolDispatcher,
        max_tool_rounds: int = 1,
    ) -> None:
        self._ai_client = ai_client
        self._registry = registry
        self._dispatcher = dispatcher
        self._max_tool_rounds = max(1, max_tool_rounds)

    async def run(
        self,
        message: str | None,
        history: Sequence[ConversationMessage] = (),
    ) -> ChatResult:
        """Run one chat turn.

        Args:
            message: The new user message
            history: Prior conversation, oldest first

        Returns:
            ChatResult: Final answer and tool call outcomes

        Raises:
            BadRequestError: If the message is missing or empty
            RegistryUninitializedError: If the model requests tools while the
                registry is not ready
        """
        if not message:
            raise BadRequestError("Message must not be empty")

        states = [ChatState.AWAITING_INPUT]
        messages = build_conversation(history, message)
        tools = self._registry.declarations
        logger.info(
            f"Chat turn with {len(messages)} messages and {len(tools)} tools "
            f"using {self._ai_client.model}"
        )

        states.append(ChatState.AI_ROUND_1)
        completion = await self._ai_client.complete(messages, tools or None)

        outcomes: list[ToolOutcome] = []
        rounds = 0
        while completion.has_tool_calls and rounds < self._max_tool_rounds:
            rounds += 1
            states.append(ChatState.DISPATCHING_TOOLS)
            self._registry.require_ready()
            logger.info(f"Model requested {len(completion.tool_calls)} tool calls")

            batch = await self._dispatcher.invoke_batch(completion.tool_calls)
            outcomes.extend(batch)
            messages = append_tool_results(messages, batch)

            states.append(ChatState.AI_ROUND_2)
            attach_tools = rounds < self._max_tool_rounds and bool(tools)
            completion = await self._ai_client.complete(
                messages, tools if attach_tools else None
            )

        if completion.has_tool_calls:
            logger.warning(
                f"Ignoring {len(completion.tool_calls)} tool calls after "
                f"{rounds} tool rounds"
            )

        states.append(ChatState.DONE)
        return ChatResult(
            response=format_response(completion),
            tool_calls=outcomes,
            states=states,
        )
