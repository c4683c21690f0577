"""Todo endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, FastAPI

from src.identity import User

from ..auth import authenticate
from ..dependencies import get_todo_service, run_service, serialize_todo
from ..schemas import (
    ERROR_RESPONSES,
    MessageResponse,
    TodoCreateRequest,
    TodoEnvelope,
    TodoListResponse,
    TodoUpdateRequest,
)


def register_todo_routes(app: FastAPI, prefix: str = "/api") -> None:
    """Register todo CRUD endpoints behind bearer authentication."""
    router = APIRouter(
        prefix=f"{prefix}/todos",
        tags=["todos"],
        dependencies=[Depends(authenticate)],
        responses=ERROR_RESPONSES,
    )

    @router.get("", response_model=TodoListResponse)
    async def list_todos(user: User = Depends(authenticate)) -> TodoListResponse:
        """List the caller's todos."""
        service = get_todo_service()
        todos = await run_service("Failed to fetch todos", service.list, user.id)
        return TodoListResponse(todos=[serialize_todo(todo) for todo in todos])

    @router.post("", status_code=201, response_model=TodoEnvelope)
    async def create_todo(
        request: TodoCreateRequest, user: User = Depends(authenticate)
    ) -> TodoEnvelope:
        """Create a todo; priority defaults to medium."""
        service = get_todo_service()
        todo = await run_service(
            "Failed to create todo",
            service.create,
            user.id,
            request.title,
            request.description,
            request.priority,
        )
        return TodoEnvelope(todo=serialize_todo(todo), message="Todo created successfully")

    @router.put("/{todo_id}", response_model=TodoEnvelope)
    async def update_todo(
        todo_id: str, request: TodoUpdateRequest, user: User = Depends(authenticate)
    ) -> TodoEnvelope:
        """Partially update a todo."""
        service = get_todo_service()
        todo = await run_service(
            "Failed to update todo",
            service.update,
            user.id,
            todo_id,
            request.model_dump(exclude_unset=True),
        )
        return TodoEnvelope(todo=serialize_todo(todo), message="Todo updated successfully")

    @router.delete("/{todo_id}", response_model=MessageResponse)
    async def delete_todo(todo_id: str, user: User = Depends(authenticate)) -> MessageResponse:
        """Delete a todo."""
        service = get_todo_service()
        await run_service("Failed to delete todo", service.delete, user.id, todo_id)
        return MessageResponse(message="Todo deleted successfully")

    app.include_router(router)
