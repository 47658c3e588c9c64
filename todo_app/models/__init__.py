from todo_app.models.user import User
from todo_app.models.todo import Todo
from todo_app.models.token import RevokedToken

__all__ = ["User", "Todo", "RevokedToken"]
