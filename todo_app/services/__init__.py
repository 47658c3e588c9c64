from todo_app.services.auth_service import AuthService
from todo_app.services.todo_service import TodoService

__all__ = ["AuthService", "TodoService"]
