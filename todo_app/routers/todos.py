from typing import List

from fastapi import APIRouter, Body, Depends, Response
from todo_app.models.user import User
from todo_app.routers.deps import get_current_user, get_todo_service
from todo_app.schemas.todo import TodoCreate, TodoOut
from todo_app.services.todo_service import TodoService

router = APIRouter(prefix="/todos", tags=["todos"])


@router.get("", response_model=List[TodoOut])
def list_todos(user: User = Depends(get_current_user), todos: TodoService = Depends(get_todo_service)):
    """Caller's todos, latest due date first; undated todos come last."""
    return todos.list(user)


@router.post("", response_model=TodoOut, status_code=201)
def create_todo(payload: TodoCreate, user: User = Depends(get_current_user), todos: TodoService = Depends(get_todo_service)):
    return todos.create(user, payload)


@router.get("/{todo_id}", response_model=TodoOut)
def show_todo(todo_id: int, user: User = Depends(get_current_user), todos: TodoService = Depends(get_todo_service)):
    return todos.show(user, todo_id)


@router.api_route("/{todo_id}", methods=["PUT", "PATCH"], response_model=TodoOut)
def update_todo(
    todo_id: int,
    payload: dict = Body(..., description="Any subset of title, description, completed, due_date"),
    user: User = Depends(get_current_user),
    todos: TodoService = Depends(get_todo_service),
):
    """Partial update; the body is checked against TodoUpdate after the ownership check."""
    return todos.update(user, todo_id, payload)


@router.delete("/{todo_id}", status_code=204, response_class=Response)
def delete_todo(todo_id: int, user: User = Depends(get_current_user), todos: TodoService = Depends(get_todo_service)):
    todos.destroy(user, todo_id)
    return Response(status_code=204)
