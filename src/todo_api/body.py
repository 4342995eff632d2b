"""
Request body ingestion: bounded reading and JSON decoding.

``read_body`` consumes the ASGI body stream incrementally and stops as soon as
the configured byte limit is crossed. ``decode_json`` never raises; it returns
a ``JsonResult`` the route handlers turn into a 400 when parsing failed.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from starlette.requests import ClientDisconnect, Request

from .errors import BodyReadError, PayloadTooLarge

logger = logging.getLogger(__name__)

DEFAULT_LIMIT_BYTES = 1_000_000


def _declared_length(request: Request) -> Optional[int]:
    raw = request.headers.get("content-length")
    if raw is None or not raw.strip().isdecimal():
        return None
    return int(raw)


# PUBLIC_INTERFACE
async def read_body(request: Request, limit_bytes: int = DEFAULT_LIMIT_BYTES) -> str:
    """
    Read the request body as UTF-8 text, failing fast once it exceeds limit_bytes.

    Args:
        request: The incoming request whose body has not been consumed yet.
        limit_bytes: Maximum number of body bytes accepted.

    Returns:
        The body decoded as UTF-8; invalid sequences are replaced with U+FFFD.

    Raises:
        PayloadTooLarge: the declared or received size exceeded limit_bytes.
            Remaining bytes are left unread and the response closes the connection.
        BodyReadError: the client went away before the body was complete.
    """
    declared = _declared_length(request)
    if declared is not None and declared > limit_bytes:
        logger.warning("Rejecting body: declared %d bytes, limit %d", declared, limit_bytes)
        raise PayloadTooLarge()

    received = 0
    chunks: List[bytes] = []
    try:
        async for chunk in request.stream():
            received += len(chunk)
            if received > limit_bytes:
                logger.warning("Aborting body read after %d bytes, limit %d", received, limit_bytes)
                raise PayloadTooLarge()
            chunks.append(chunk)
    except ClientDisconnect as exc:
        raise BodyReadError("client disconnected while sending the request body") from exc

    return b"".join(chunks).decode("utf-8", errors="replace")


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class JsonResult:
    """
    Outcome of decode_json.

    Fields:
    - ok: True when the text parsed
    - value: The decoded value (only meaningful when ok)
    - error: The parse error when not ok
    """

    ok: bool
    value: Any = None
    error: Optional[Exception] = None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


# PUBLIC_INTERFACE
def decode_json(text: str) -> JsonResult:
    """Parse text as strict JSON (NaN/Infinity rejected) without raising."""
    try:
        return JsonResult(ok=True, value=json.loads(text, parse_constant=_reject_constant))
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError is a ValueError; deep nesting exhausts the recursion limit
        return JsonResult(ok=False, error=exc)
