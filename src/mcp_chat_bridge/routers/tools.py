"""Tool API endpoints.

This module provides endpoints for listing the MCP tools available to the
model and for calling a tool directly.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from mcp_chat_bridge.dependencies import (
    ensure_tool_registry,
    get_tool_dispatcher,
    get_tool_registry,
)
from mcp_chat_bridge.models.tools import (
    CallToolRequest,
    CallToolResponse,
    FunctionDeclarationModel,
    ToolListResponse,
)
from mcp_chat_bridge.tools import ToolDispatcher, ToolRegistry
from mcp_chat_bridge.tools.types import serialize_result

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["tools"],
    dependencies=[Depends(ensure_tool_registry)],
)


@router.get("/tools", response_model=ToolListResponse)
async def list_tools(
    registry: ToolRegistry = Depends(get_tool_registry),
) -> ToolListResponse:
    """List the tools currently available to the model.

    Returns an empty list while the MCP server is not connected.
    """
    tools = [
        FunctionDeclarationModel(**declaration.to_dict())
        for declaration in registry.declarations
    ]
    logger.debug(f"Listed {len(tools)} tools")
    return ToolListResponse(tools=tools)


@router.post("/call-tool", response_model=CallToolResponse)
async def call_tool(
    request_body: CallToolRequest,
    dispatcher: ToolDispatcher = Depends(get_tool_dispatcher),
):
    """Call an MCP tool directly.

    Args:
        request_body: Tool name and arguments
        dispatcher: Injected tool dispatcher

    Returns:
        CallToolResponse with the raw tool result, or a JSON error body with
        status 400 (missing name) or 500 (dispatch failure)
    """
    if not request_body.name:
        logger.warning("Rejected tool call request without a tool name")
        return JSONResponse(status_code=400, content={"error": "Tool name must not be empty"})

    try:
        result = await dispatcher.call_tool(request_body.name, request_body.args or {})
    except Exception as e:
        logger.error(f"Tool call request failed: {e}")
        return JSONResponse(status_code=500, content={"error": str(e) or type(e).__name__})

    return CallToolResponse(result=serialize_result(result))
