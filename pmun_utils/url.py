"""URL helpers kept for backwards compatibility."""

import warnings
from collections.abc import Mapping
from typing import Any

from pmun_utils.objects import object_to_query_string


def get_query_stringify(params: Mapping[str, Any] | None) -> str:
    """
    Build a query string with a leading "?", or "" when there is nothing to send.

    Deprecated: use `object_to_query_string` and add the "?" yourself.

    Example:
        >>> get_query_stringify({"page": 1, "q": None})
        '?page=1'
    """
    warnings.warn(
        "get_query_stringify is deprecated; use object_to_query_string instead",
        DeprecationWarning,
        stacklevel=2,
    )
    if not params:
        return ""
    query = object_to_query_string(params)
    return f"?{query}" if query else ""
