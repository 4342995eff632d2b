from __future__ import annotations

from typing import Dict, Optional

from fastapi import HTTPException, status


# PUBLIC_INTERFACE
class TodoApiError(HTTPException):
    """
    Base class for errors that map directly onto an HTTP response.

    Subclasses set a class-level status code and default message; the message
    ends up in ``detail`` and is rendered as ``{"message": detail}``.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None) -> None:
        super().__init__(
            status_code=type(self).status_code,
            detail=message or type(self).message,
            headers=headers,
        )


class PayloadTooLarge(TodoApiError):
    status_code = 413
    message = "Payload too large"

    def __init__(self, message: Optional[str] = None) -> None:
        # The rest of the upload is never read, so the connection must not be reused.
        super().__init__(message, headers={"Connection": "close"})


class InvalidJson(TodoApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid JSON"


class UnprocessableTitle(TodoApiError):
    status_code = 422
    message = "title is required"


class UnprocessableDone(TodoApiError):
    status_code = 422
    message = "done must be boolean"


class UnsupportedMediaType(TodoApiError):
    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    message = "Content-Type must be application/json"


class TodoNotFound(TodoApiError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Todo not found"


class RouteNotFound(TodoApiError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not Found"


class MethodNotAllowed(TodoApiError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    message = "Method Not Allowed"

    def __init__(self, allowed: str) -> None:
        super().__init__(headers={"Allow": allowed})


class BodyReadError(Exception):
    """Raised when the transport fails while the request body is being read."""
