from todo_app.repositories.todo_repo import SqlAlchemyTodoRepository, TodoRepository
from todo_app.repositories.user_repo import RevokedTokenRepository, UserRepository

__all__ = ["TodoRepository", "SqlAlchemyTodoRepository", "UserRepository", "RevokedTokenRepository"]
