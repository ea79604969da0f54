"""Text extraction from chat responses.

The responses endpoint has returned several output shapes over time. Each
strategy below looks at one of them and returns a non-empty string or None;
``extract_response_text`` tries them in order and falls back to a fixed
literal when none match.
"""

import json
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response"
UNREADABLE_CONTENT = "[unreadable content]"

Strategy = Callable[[dict[str, Any]], str | None]


def to_text(value: Any) -> str:
    """Flatten an arbitrary output value into display text.

    Mappings are unwrapped through ``text``, ``output_text`` and ``summary``
    string fields, then a nested ``content`` field. Lists are joined with
    newlines. Anything else is JSON-serialized.

    Args:
        value: Decoded JSON value (or anything else).

    Returns:
        The extracted text, possibly empty.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)
    if isinstance(value, list | tuple):
        return "\n".join(to_text(item) for item in value)
    if isinstance(value, dict):
        for key in ("text", "output_text", "summary"):
            if isinstance(value.get(key), str):
                return value[key]
        if "content" in value:
            return to_text(value["content"])
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return UNREADABLE_CONTENT


def _output_entries(response: dict[str, Any]) -> list[Any]:
    output = response.get("output")
    return output if isinstance(output, list) else []


def _first_of_type(entries: list[Any], entry_type: str) -> Any:
    return next(
        (e for e in entries if isinstance(e, dict) and e.get("type") == entry_type),
        None,
    )


def _non_empty(value: Any) -> str | None:
    return to_text(value) or None


def from_message_block(response: dict[str, Any]) -> str | None:
    """Text of the first message block's output_text item (or first item)."""
    block = _first_of_type(_output_entries(response), "message")
    if block is None or not isinstance(block.get("content"), list):
        return None
    content = block["content"]
    if not content:
        return None
    item = _first_of_type(content, "output_text")
    return _non_empty(item if item is not None else content[0])


def from_output_text_entry(response: dict[str, Any]) -> str | None:
    """Text of a bare output_text entry in the output list."""
    return _non_empty(_first_of_type(_output_entries(response), "output_text"))


def field_strategy(field: str) -> Strategy:
    """Build a strategy reading one top-level response field."""

    def strategy(response: dict[str, Any]) -> str | None:
        return _non_empty(response.get(field))

    strategy.__name__ = f"from_{field}"
    return strategy


STRATEGIES: tuple[Strategy, ...] = (
    from_message_block,
    from_output_text_entry,
    field_strategy("output_text"),
    field_strategy("output"),
    field_strategy("response"),
    field_strategy("result"),
    field_strategy("text"),
)


def extract_response_text(
    response: Any,
    strategies: tuple[Strategy, ...] = STRATEGIES,
) -> str:
    """Extract the assistant's answer from a responses payload.

    Args:
        response: Decoded JSON body of a create-response call.
        strategies: Extraction strategies, tried in order.

    Returns:
        The first non-empty text found, else "No response".
    """
    if not isinstance(response, dict):
        return NO_RESPONSE

    for strategy in strategies:
        text = strategy(response)
        if text:
            logger.debug(f"Extracted response text via {strategy.__name__}")
            return text
    return NO_RESPONSE
