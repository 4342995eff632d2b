from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Characters JavaScript's String.prototype.trim removes: WhiteSpace plus LineTerminator.
# Differs from str.strip(): U+FEFF is included, \x1c-\x1f and \x85 are not.
TRIM_CHARS = (
    "\t\n\x0b\x0c\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def _coerce_title(value: Any) -> str:
    """
    Internal helper turning an arbitrary decoded JSON value into title text.
    - Missing/null/false/0/"" become an empty string.
    - true becomes "true"; numbers become their decimal text (1.0 -> "1").
    - Arrays and objects are not string-coercible and become an empty string.
    The result is trimmed with TRIM_CHARS.
    """
    if value is None or value is False or value == "":
        return ""
    if value is True:
        return "true"
    if isinstance(value, str):
        return value.strip(TRIM_CHARS)
    if isinstance(value, int):
        return "" if value == 0 else str(value)
    if isinstance(value, float):
        if value == 0:
            return ""
        return str(int(value)) if value.is_integer() else repr(value)
    return ""


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item. Unknown fields are ignored.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"title": "buy milk"}},
    )

    title: str = Field(default="", validate_default=True, description="Title of the todo item")

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        """
        Coerce to text, strip whitespace and require a non-empty result.
        """
        s = _coerce_title(v)
        if not s:
            raise ValueError("title is required")
        return s


# PUBLIC_INTERFACE
class TodoPatch(BaseModel):
    """
    Schema for partially updating a Todo item.
    Only fields present in the payload are validated and applied; a present
    null counts as provided and is rejected.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"title": "buy oat milk", "done": True}},
    )

    title: Optional[str] = Field(default=None, description="New title; must stay non-empty")
    done: Optional[bool] = Field(default=None, description="New completion flag")

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        s = _coerce_title(v)
        if not s:
            raise ValueError("title cannot be empty")
        return s

    @field_validator("done", mode="before")
    @classmethod
    def validate_done(cls, v: Any) -> bool:
        # Only JSON booleans; no "true"/1 coercion.
        if not isinstance(v, bool):
            raise ValueError("done must be boolean")
        return v


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"id": 1, "title": "buy milk", "done": False}}
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Title of the todo item")
    done: bool = Field(..., description="Completion status flag")


# PUBLIC_INTERFACE
class TodoListOut(BaseModel):
    """
    Envelope for list responses.
    """

    items: List[TodoOut] = Field(..., description="List of Todo items")
    count: int = Field(..., description="Number of items in the list")


# PUBLIC_INTERFACE
class HealthOut(BaseModel):
    """Health check payload."""

    ok: bool = Field(..., description="Always true while the process is serving")
    uptime: float = Field(..., description="Seconds since process start")


# PUBLIC_INTERFACE
class MessageOut(BaseModel):
    """Error payload shared by every non-2xx response."""

    message: str = Field(..., description="Human-readable error message")
