from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session
from todo_app.models.todo import Todo


class TodoRepository(ABC):
    """Storage seam for todos; the service layer only talks to this interface."""

    @abstractmethod
    def find_by_id(self, todo_id: int) -> Optional[Todo]: ...

    @abstractmethod
    def list_by_user(self, user_id: int) -> List[Todo]: ...

    @abstractmethod
    def insert(self, todo: Todo) -> Todo: ...

    @abstractmethod
    def update(self, todo: Todo, changes: dict) -> Todo: ...

    @abstractmethod
    def delete(self, todo: Todo) -> None: ...


# ids are stored as signed 64-bit integers; anything outside cannot exist
MAX_ID = 2**63 - 1
MIN_ID = -(2**63)


class SqlAlchemyTodoRepository(TodoRepository):
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, todo_id: int) -> Optional[Todo]:
        if not MIN_ID <= todo_id <= MAX_ID:
            return None
        return self.db.get(Todo, todo_id)

    def list_by_user(self, user_id: int) -> List[Todo]:
        # due_date desc with nulls last, written portably (not every backend has NULLS LAST)
        stmt = (
            select(Todo)
            .where(Todo.user_id == user_id)
            .order_by(
                Todo.due_date.is_(None),
                Todo.due_date.desc(),
                Todo.created_at.desc(),
                Todo.id.desc(),
            )
        )
        return list(self.db.scalars(stmt).all())

    def insert(self, todo: Todo) -> Todo:
        self.db.add(todo)
        self.db.commit()
        self.db.refresh(todo)
        return todo

    def update(self, todo: Todo, changes: dict) -> Todo:
        for field, value in changes.items():
            setattr(todo, field, value)
        self.db.commit()
        self.db.refresh(todo)
        return todo

    def delete(self, todo: Todo) -> None:
        self.db.delete(todo)
        self.db.commit()
