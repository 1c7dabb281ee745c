"""Pydantic models for chat API requests and responses.

This module defines the request and response schemas for POST /api/chat,
including the conversation message shape clients send back as history.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class MessagePart(BaseModel):
    """A single text part of a conversation message."""

    text: str = Field(default="", description="Text content of the part")

    model_config = ConfigDict(extra="ignore")


class ConversationMessage(BaseModel):
    """One message in the conversation history.

    ``model`` and ``assistant`` are accepted as synonyms for the AI side of
    the conversation; provider clients map them to their own role names.
    """

    role: Literal["user", "model", "assistant"] = Field(
        description="Author of the message"
    )
    parts: list[MessagePart] = Field(
        default_factory=list, description="Ordered text parts"
    )

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def user(cls, text: str) -> "ConversationMessage":
        """Build a single-part user message."""
        return cls(role="user", parts=[MessagePart(text=text)])

    @property
    def text(self) -> str:
        """All parts joined together."""
        return "".join(part.text for part in self.parts)


class ChatRequest(BaseModel):
    """Request body for POST /api/chat.

    ``message`` is optional at the schema level so that a missing message is
    answered with a 400 error body rather than a validation error.
    """

    message: str | None = Field(default=None, description="The user message to send")
    history: list[ConversationMessage] = Field(
        default_factory=list,
        description="Prior conversation messages, oldest first",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "message": "What's the weather in Paris?",
                    "history": [],
                },
            ]
        }
    )


class ChatResponse(BaseModel):
    """Response body for POST /api/chat."""

    response: str = Field(description="Final answer text from the model")
    tool_calls: list[dict[str, Any]] = Field(
        default_factory=list,
        alias="toolCalls",
        description="Outcome of every tool call made while answering",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "response": "It is 18°C and sunny in Paris.\n",
                "toolCalls": [
                    {
                        "name": "get_weather",
                        "result": {
                            "content": [{"type": "text", "text": "18°C, sunny"}],
                            "isError": False,
                        },
                    }
                ],
            }
        },
    )
