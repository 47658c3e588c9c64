from todo_app.schemas.todo import TodoCreate, TodoUpdate, TodoOut
from todo_app.schemas.user import AuthResponse, UserCreate, UserLogin, UserOut, UserUpdate

__all__ = [
    "TodoCreate",
    "TodoUpdate",
    "TodoOut",
    "AuthResponse",
    "UserCreate",
    "UserLogin",
    "UserOut",
    "UserUpdate",
]
