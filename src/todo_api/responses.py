from __future__ import annotations

from fastapi.responses import JSONResponse


# PUBLIC_INTERFACE
class UTF8JSONResponse(JSONResponse):
    """JSON response whose Content-Type states the charset explicitly."""

    media_type = "application/json; charset=utf-8"
