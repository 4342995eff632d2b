from __future__ import annotations

from typing import Any, Dict

from pydantic import ValidationError

from .errors import UnprocessableDone, UnprocessableTitle
from .schemas import TodoCreate, TodoPatch


def _as_object(payload: Any) -> Dict[str, Any]:
    # Arrays, scalars and null carry no named fields.
    return payload if isinstance(payload, dict) else {}


# PUBLIC_INTERFACE
def validate_create(payload: Any) -> TodoCreate:
    """
    Validate a decoded POST /todos payload.

    Raises:
        UnprocessableTitle: if the title is missing or blank after trimming.
    """
    try:
        return TodoCreate.model_validate(_as_object(payload))
    except ValidationError as exc:
        raise UnprocessableTitle("title is required") from exc


# PUBLIC_INTERFACE
def validate_patch(payload: Any) -> TodoPatch:
    """
    Validate a decoded PATCH /todos/{id} payload.

    Fields are checked in declaration order (title, then done) and the first
    failing field decides the error.

    Raises:
        UnprocessableTitle: if a provided title is blank after trimming.
        UnprocessableDone: if a provided done is not a boolean.
    """
    try:
        return TodoPatch.model_validate(_as_object(payload))
    except ValidationError as exc:
        first = exc.errors()[0]
        if first["loc"] and first["loc"][0] == "done":
            raise UnprocessableDone("done must be boolean") from exc
        raise UnprocessableTitle("title cannot be empty") from exc
