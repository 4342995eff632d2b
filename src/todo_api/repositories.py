from __future__ import annotations

from abc import ABC, abstractmethod
from threading import RLock
from typing import Dict, List, Optional

from fastapi import Request

from .models import TodoEntity
from .schemas import TodoCreate, TodoPatch


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage."""

    @abstractmethod
    def create(self, data: TodoCreate) -> TodoEntity:
        """Create and return a new TodoEntity with done=False."""

    @abstractmethod
    def get(self, todo_id: int) -> Optional[TodoEntity]:
        """Return a TodoEntity by id, or None if not found."""

    @abstractmethod
    def update(self, todo_id: int, data: TodoPatch) -> Optional[TodoEntity]:
        """Apply the provided patch fields. Return the updated entity or None if not found."""

    @abstractmethod
    def delete(self, todo_id: int) -> bool:
        """Delete a TodoEntity by id. Return True if something was removed; never raises for unknown ids."""

    @abstractmethod
    def list(self, done: Optional[bool] = None) -> List[TodoEntity]:
        """Return all TodoEntities in store order, optionally only those whose done flag equals `done`."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository. Ids start at 1 and are never reused.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: Dict[int, TodoEntity] = {}
        self._next_id = 1

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def create(self, data: TodoCreate) -> TodoEntity:
        with self._lock:
            entity: TodoEntity = {
                "id": self._allocate_id(),
                "title": data.title,
                "done": False,
            }
            self._items[entity["id"]] = entity
            return entity.copy()

    def get(self, todo_id: int) -> Optional[TodoEntity]:
        with self._lock:
            item = self._items.get(todo_id)
            return None if item is None else item.copy()

    def update(self, todo_id: int, data: TodoPatch) -> Optional[TodoEntity]:
        with self._lock:
            existing = self._items.get(todo_id)
            if existing is None:
                return None

            # Update only provided fields
            updated = existing.copy()
            if data.title is not None:
                updated["title"] = data.title
            if data.done is not None:
                updated["done"] = data.done

            self._items[todo_id] = updated
            return updated.copy()

    def delete(self, todo_id: int) -> bool:
        with self._lock:
            return self._items.pop(todo_id, None) is not None

    def list(self, done: Optional[bool] = None) -> List[TodoEntity]:
        with self._lock:
            items = self._items.values()
            if done is not None:
                return [t.copy() for t in items if t["done"] == done]
            # Return copies to avoid external mutation
            return [t.copy() for t in items]


# PUBLIC_INTERFACE
def get_repository(request: Request) -> Repository:
    """
    Dependency returning the repository owned by the running application.
    The instance is created once by create_app() and lives for the process.
    """
    return request.app.state.repository
