"""Pydantic models for the tool API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class FunctionDeclarationModel(BaseModel):
    """A tool as presented to the AI model."""

    name: str = Field(description="Tool name")
    description: str = Field(default="", description="Tool description")
    parameters: dict[str, Any] = Field(
        default_factory=dict, description="Adapted JSON Schema of the arguments"
    )


class ToolListResponse(BaseModel):
    """Response model for GET /api/tools."""

    tools: list[FunctionDeclarationModel] = Field(
        default_factory=list, description="Currently available tools"
    )


class CallToolRequest(BaseModel):
    """Request body for POST /api/call-tool."""

    name: str | None = Field(default=None, description="Name of the tool to call")
    args: dict[str, Any] | None = Field(
        default=None, description="Arguments for the tool"
    )


class CallToolResponse(BaseModel):
    """Response body for POST /api/call-tool."""

    result: Any = Field(description="Raw result returned by the tool service")
