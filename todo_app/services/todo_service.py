import logging
from typing import List

from pydantic import ValidationError as SchemaError
from todo_app.errors import NotFound, Unauthorized, ValidationError, translate_validation_errors
from todo_app.models.todo import Todo
from todo_app.models.user import User
from todo_app.repositories.todo_repo import TodoRepository
from todo_app.schemas.todo import TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)


class TodoService:
    """Owner-scoped todo operations.

    Every lookup by id checks existence first (404) and ownership second (403).
    Update payloads are validated only after both checks pass.
    """

    def __init__(self, repo: TodoRepository):
        self.repo = repo

    def list(self, caller: User) -> List[Todo]:
        return self.repo.list_by_user(caller.id)

    def create(self, caller: User, payload: TodoCreate) -> Todo:
        todo = Todo(**payload.model_dump(), user_id=caller.id)
        todo = self.repo.insert(todo)
        logger.info("User %s created todo %s", caller.id, todo.id)
        return todo

    def show(self, caller: User, todo_id: int) -> Todo:
        return self._owned(caller, todo_id)

    def update(self, caller: User, todo_id: int, payload: dict) -> Todo:
        todo = self._owned(caller, todo_id)
        try:
            changes = TodoUpdate.model_validate(payload).changes()
        except SchemaError as exc:
            raise ValidationError(translate_validation_errors(exc.errors(), prefixed=False))
        todo = self.repo.update(todo, changes)
        logger.info("User %s updated todo %s (%s)", caller.id, todo.id, ", ".join(sorted(changes)) or "no changes")
        return todo

    def destroy(self, caller: User, todo_id: int) -> None:
        todo = self._owned(caller, todo_id)
        self.repo.delete(todo)
        logger.info("User %s deleted todo %s", caller.id, todo_id)

    def _owned(self, caller: User, todo_id: int) -> Todo:
        todo = self.repo.find_by_id(todo_id)
        if todo is None:
            raise NotFound()
        if todo.user_id != caller.id:
            logger.warning("User %s denied access to todo %s", caller.id, todo_id)
            raise Unauthorized()
        return todo
