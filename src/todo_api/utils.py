from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence, Union


# PUBLIC_INTERFACE
def list_envelope(items: Union[Sequence[Any], Iterable[Any]]) -> Dict[str, Any]:
    """
    Build the standard envelope for list endpoints.

    Args:
        items: The list/iterable of items to return.

    Returns:
        Dict with keys: items, count.
    """
    # Ensure items is materialized as a list (in case an iterator is passed)
    materialized: List[Any] = list(items) if not isinstance(items, list) else items
    return {"items": materialized, "count": len(materialized)}


# PUBLIC_INTERFACE
def media_type(content_type: str) -> str:
    """Return the media type of a Content-Type header value, parameters after ';' dropped."""
    return content_type.split(";")[0].strip()
