from __future__ import annotations

import re
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from ..body import decode_json, read_body
from ..errors import (
    InvalidJson,
    MethodNotAllowed,
    RouteNotFound,
    TodoApiError,
    TodoNotFound,
    UnsupportedMediaType,
)
from ..models import TodoEntity
from ..repositories import Repository, get_repository
from ..schemas import MessageOut, TodoListOut, TodoOut
from ..utils import list_envelope, media_type
from ..validation import validate_create, validate_patch

ITEM_METHODS = "GET, PATCH, DELETE"
ITEM_PATH = re.compile(r"/todos/([0-9]+)")

# Fallback routes list every standard verb; anything else reaches unrouted_method_error
# through the 405 Starlette raises for a partial match.
FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)


def _get_repo(repo: Repository = Depends(get_repository)) -> Repository:
    """
    Dependency wrapper for repository to keep signatures clean.
    """
    return repo


def _existing_todo(todo_id: int, repo: Repository = Depends(_get_repo)) -> TodoEntity:
    """
    Resolve the todo addressed by the path, before any body is looked at.
    """
    item = repo.get(todo_id)
    if item is None:
        raise TodoNotFound()
    return item


async def _read_json_payload(request: Request) -> Any:
    """
    Content-Type check, bounded read and JSON decode, in that order.

    Raises:
        UnsupportedMediaType (415), PayloadTooLarge (413), InvalidJson (400).
    """
    if media_type(request.headers.get("content-type", "")) != "application/json":
        raise UnsupportedMediaType()

    text = await read_body(request, limit_bytes=request.app.state.settings.max_body_bytes)
    decoded = decode_json(text)
    if not decoded.ok:
        raise InvalidJson()
    return decoded.value


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=TodoListOut,
    summary="List Todos",
    description=(
        "List todos, optionally filtered by completion.\n\n"
        "Query parameters:\n"
        "- done: 'true' selects completed todos; any other value selects open ones"
    ),
)
async def list_todos(
    request: Request,
    done: Optional[str] = Query(None, description="'true' for completed todos, anything else for open ones"),
    repo: Repository = Depends(_get_repo),
) -> TodoListOut:
    """
    List todos. The filter is an exact comparison with the string 'true'.
    """
    filter_done = None
    if done is not None:
        # A repeated parameter counts by its first occurrence.
        filter_done = request.query_params.getlist("done")[0] == "true"
    items = repo.list(done=filter_done)
    envelope = list_envelope([TodoOut(**it) for it in items])
    return TodoListOut(**envelope)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item from a JSON body {\"title\": ...} and return it.",
    responses={
        400: {"model": MessageOut, "description": "Body is not valid JSON"},
        413: {"model": MessageOut, "description": "Body exceeds the size limit"},
        415: {"model": MessageOut, "description": "Content-Type is not application/json"},
        422: {"model": MessageOut, "description": "title is required"},
    },
)
async def create_todo(request: Request, repo: Repository = Depends(_get_repo)) -> TodoOut:
    """
    Create a new Todo.
    """
    payload = await _read_json_payload(request)
    data = validate_create(payload)
    created = repo.create(data)
    return TodoOut(**created)


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id:int}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={404: {"model": MessageOut, "description": "Todo not found"}},
)
async def get_todo(todo: TodoEntity = Depends(_existing_todo)) -> TodoOut:
    """
    Retrieve a single Todo item by its ID.
    """
    return TodoOut(**todo)


# PUBLIC_INTERFACE
@router.patch(
    "/{todo_id:int}",
    response_model=TodoOut,
    summary="Update Todo",
    description="Partially update title and/or done of a Todo item. Unknown fields are ignored.",
    responses={
        400: {"model": MessageOut, "description": "Body is not valid JSON"},
        404: {"model": MessageOut, "description": "Todo not found"},
        413: {"model": MessageOut, "description": "Body exceeds the size limit"},
        415: {"model": MessageOut, "description": "Content-Type is not application/json"},
        422: {"model": MessageOut, "description": "title cannot be empty / done must be boolean"},
    },
)
async def patch_todo(
    request: Request,
    todo: TodoEntity = Depends(_existing_todo),
    repo: Repository = Depends(_get_repo),
) -> TodoOut:
    """
    Partial update of a Todo item.
    """
    payload = await _read_json_payload(request)
    patch = validate_patch(payload)
    updated = repo.update(todo["id"], patch)
    if updated is None:
        # Deleted while the body was being read.
        raise TodoNotFound()
    return TodoOut(**updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id:int}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses={404: {"model": MessageOut, "description": "Todo not found"}},
)
async def delete_todo(
    todo: TodoEntity = Depends(_existing_todo),
    repo: Repository = Depends(_get_repo),
) -> Response:
    """
    Delete a Todo. Returns 204 with an empty body.
    """
    repo.delete(todo["id"])
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# PUBLIC_INTERFACE
def unrouted_method_error(request: Request) -> TodoApiError:
    """
    Error for a method no route serves on the requested path.

    On /todos/{id} the todo must exist (404 otherwise), then it is a 405 with
    the Allow header; on every other path it is a plain 404.
    """
    match = ITEM_PATH.fullmatch(request.url.path)
    if match is None:
        return RouteNotFound()
    if get_repository(request).get(int(match.group(1))) is None:
        return TodoNotFound()
    return MethodNotAllowed(ITEM_METHODS)


# PUBLIC_INTERFACE
async def todo_method_not_allowed(request: Request) -> Response:
    """
    Endpoint for every other method on /todos/{id}.
    Registered on the app after this router so the routes above win.
    """
    raise unrouted_method_error(request)
