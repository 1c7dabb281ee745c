"""Chat API endpoint.

This module provides POST /api/chat, which runs one chat turn through the
AI model and the MCP tool service.
"""

import logging
import traceback

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from mcp_chat_bridge.dependencies import ensure_tool_registry, get_chat_service
from mcp_chat_bridge.errors import BadRequestError
from mcp_chat_bridge.models.chat import ChatRequest, ChatResponse
from mcp_chat_bridge.services import ChatService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["chat"],
    dependencies=[Depends(ensure_tool_registry)],
)


def _error_body(error: Exception, include_stack: bool) -> dict:
    """Build the JSON body for a failed chat request.

    Args:
        error: The exception that ended the request
        include_stack: Whether to include the formatted traceback

    Returns:
        dict with error message, error code and optionally the stack trace
    """
    code = getattr(error, "code", None)
    body = {
        "error": str(error) or type(error).__name__,
        "code": str(code) if code is not None else "internal_error",
    }
    if include_stack:
        body["stack"] = "".join(traceback.format_exception(error))
    return body


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request_body: ChatRequest,
    request: Request,
    chat_service: ChatService = Depends(get_chat_service),
):
    """Send a message and receive the model's final answer.

    If the model requests tool calls, they are executed against the MCP
    server and their outcomes are fed back to the model before answering.

    Args:
        request_body: Chat request containing the message and history
        request: FastAPI request object
        chat_service: Injected chat service

    Returns:
        ChatResponse with the answer text and tool call outcomes, or a JSON
        error body with status 400 (missing message) or 500
    """
    logger.info("Received chat request")
    logger.debug(f"History length: {len(request_body.history)}")

    try:
        result = await chat_service.run(request_body.message, request_body.history)
    except BadRequestError as e:
        logger.warning(f"Rejected chat request: {e.message}")
        return JSONResponse(status_code=400, content={"error": e.message})
    except Exception as e:
        logger.error(f"Chat request failed: {e}")
        settings = request.app.state.settings
        return JSONResponse(
            status_code=500,
            content=_error_body(e, include_stack=settings.expose_error_stack),
        )

    logger.info(
        f"Chat request completed with {len(result.tool_calls)} tool calls "
        f"({len(result.response)} characters)"
    )
    return ChatResponse(
        response=result.response,
        tool_calls=[outcome.to_dict() for outcome in result.tool_calls],
    )
