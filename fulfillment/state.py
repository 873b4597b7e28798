"""Opaque state tokens.

Conversation data and user storage travel through the platform as strings.
Tokens written by this library have the shape ``{"data": {...}}``; anything
else found in a token is treated as empty state.
"""

import json
from typing import Any, Optional

from fulfillment.logging_config import get_logger

logger = get_logger("state")


def pack_state(data: dict[str, Any]) -> str:
    """Wrap a state map into a token string."""
    return json.dumps({"data": data}, ensure_ascii=False)


def unpack_state(token: Optional[str]) -> dict[str, Any]:
    """Return the state map stored in `token`, or an empty dict."""
    if not token:
        return {}
    try:
        decoded = json.loads(token)
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning(
            "Unable to decode state token",
            extra={"context": {"error": str(e)}},
        )
        return {}

    if isinstance(decoded, dict) and isinstance(decoded.get("data"), dict):
        return decoded["data"]
    return {}


def pack_context_data(data: dict[str, Any]) -> str:
    """Encode conversation data for the reserved context's `data` parameter."""
    return json.dumps(data, ensure_ascii=False)


def unpack_context_data(value: Any) -> dict[str, Any]:
    """Decode the reserved context's `data` parameter. Accepts a string or a map."""
    if isinstance(value, dict):
        return value
    if not value or not isinstance(value, str):
        return {}
    try:
        decoded = json.loads(value)
    except (ValueError, RecursionError) as e:
        logger.warning(
            "Unable to decode conversation data context",
            extra={"context": {"error": str(e)}},
        )
        return {}
    return decoded if isinstance(decoded, dict) else {}
