"""Final answer formatting."""

from mcp_chat_bridge.ai.types import Completion


def format_response(completion: Completion) -> str:
    """Join each candidate's text parts and end every candidate with a newline.

    >>> format_response(Completion(candidates=[["4"]]))
    '4\\n'
    """
    return "".join("".join(parts) + "\n" for parts in completion.candidates)
