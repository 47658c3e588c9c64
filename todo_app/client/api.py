"""HTTP client for the todo API.

``ApiClient`` attaches the session's bearer token to every request;
``TodoAPI`` and ``AuthAPI`` wrap the individual endpoints and turn failures
into ``ApiError`` with the server's message, or a per-operation default when
the server gave none.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from todo_app.client.session import Session

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:8000"


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or {}

    @classmethod
    def from_response(cls, response: httpx.Response, default_message: str) -> "ApiError":
        message, errors = None, None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message")
            if message is None and isinstance(body.get("detail"), str):
                message = body["detail"]
            errors = body.get("errors")
        return cls(message or default_message, response.status_code, errors)


class ApiClient:
    """Thin wrapper over ``httpx.Client`` bound to a ``Session``.

    Pass ``http`` to reuse an existing client (for example FastAPI's
    ``TestClient``); paths are then resolved against that client's base URL.
    """

    def __init__(self, session: Session, base_url: str = DEFAULT_BASE_URL, http: Optional[httpx.Client] = None, timeout: float = 10.0):
        self.session = session
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self._owns_http = http is None

    def headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        return headers

    def request(self, method: str, path: str, default_message: str, json: Any = None) -> Any:
        try:
            response = self.http.request(method, path, json=json, headers=self.headers())
        except httpx.HTTPError as exc:
            raise ApiError(default_message) from exc
        if response.is_error:
            raise ApiError.from_response(response, default_message)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class TodoAPI:
    def __init__(self, client: ApiClient):
        self.client = client

    def get_todos(self) -> List[dict]:
        return self.client.request("GET", "/todos", "Failed to fetch todos")

    def create_todo(self, todo: dict) -> dict:
        return self.client.request("POST", "/todos", "Failed to create todo", json=todo)

    def update_todo(self, todo_id: int, todo: dict) -> dict:
        return self.client.request("PUT", f"/todos/{todo_id}", "Failed to update todo", json=todo)

    def delete_todo(self, todo_id: int) -> None:
        self.client.request("DELETE", f"/todos/{todo_id}", "Failed to delete todo")

    def toggle_todo(self, todo_id: int, completed: bool) -> dict:
        return self.update_todo(todo_id, {"completed": completed})


class AuthAPI:
    def __init__(self, client: ApiClient):
        self.client = client

    @property
    def session(self) -> Session:
        return self.client.session

    def register(self, user_data: dict) -> dict:
        data = self.client.request("POST", "/auth/register", "Registration failed", json=user_data)
        self.session.store(data["token"], data["user"])
        return data

    def login(self, credentials: dict) -> dict:
        data = self.client.request("POST", "/auth/login", "Login failed", json=credentials)
        self.session.store(data["token"], data["user"])
        return data

    def get_user(self) -> dict:
        user = self.client.request("GET", "/auth/user", "Failed to get user data")
        self.session.user = user
        return user

    def update_profile(self, user_data: dict) -> dict:
        user = self.client.request("PUT", "/auth/user", "Failed to update profile", json=user_data)
        self.session.user = user
        return user

    def logout(self) -> None:
        """Invalidate the token server-side, then clear the session regardless."""
        try:
            self.client.request("POST", "/auth/logout", "Logout failed")
        except ApiError as exc:
            logger.warning("Logout request failed, clearing local session anyway: %s", exc.message)
        finally:
            self.session.clear()
