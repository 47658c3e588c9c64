from todo_app.client.api import ApiClient, ApiError, AuthAPI, TodoAPI
from todo_app.client.router import ROUTES, Route, guard, navigate, resolve
from todo_app.client.session import Session

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthAPI",
    "TodoAPI",
    "ROUTES",
    "Route",
    "guard",
    "navigate",
    "resolve",
    "Session",
]
