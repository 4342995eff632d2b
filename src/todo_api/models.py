from __future__ import annotations

from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    A lightweight domain model representing a Todo item as held by the store.

    Fields:
    - id: Unique integer identifier, allocated from 1 and never reused
    - title: Non-empty title, already trimmed by the validators
    - done: Boolean completion flag
    """

    id: int
    title: str
    done: bool
