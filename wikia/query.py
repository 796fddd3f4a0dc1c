"""
Query-string helpers for the Wikia API client.

The remote API takes lists as comma-separated strings and booleans as
lowercase literals, so values are normalized here before they reach
requests.
"""

from typing import Any, Optional


def join_list(value: Any) -> Any:
    """
    Join a list or tuple of values into a comma-separated string.

    Args:
        value: A list/tuple of ids or names, or an already joined string

    Returns:
        The comma-separated string; anything else passes through unchanged
    """
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return value


def to_wire(value: Any) -> Any:
    """Encode a single parameter value the way the API expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def encode_params(params: Optional[dict]) -> dict:
    """Encode every value of a params dict for transmission."""
    if not params:
        return {}
    return {key: to_wire(value) for key, value in params.items()}
