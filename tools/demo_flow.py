"""Walk through register/login/todos/logout with the Python client, in-process."""

import sys
import uuid
from pathlib import Path

# ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient
from todo_app.client import ApiClient, ApiError, AuthAPI, Session, TodoAPI, navigate
from todo_app.main import app

session = Session()
client = ApiClient(session, http=TestClient(app))
auth, todos = AuthAPI(client), TodoAPI(client)

print("landing on /profile ->", navigate("/profile", session).name)

email = f"demo_{uuid.uuid4().hex[:8]}@example.com"
auth.register({"name": "Demo", "email": email, "password": "correct_horse", "password_confirmation": "correct_horse"})
print("registered", session)
print("landing on /login ->", navigate("/login", session).name)

todo = todos.create_todo({"title": "Try the client", "due_date": "2025-08-15"})
todos.toggle_todo(todo["id"], True)
for item in todos.get_todos():
    print(" -", item["title"], item["due_date"], "done" if item["completed"] else "open")

try:
    todos.create_todo({"title": ""})
except ApiError as exc:
    print("validation:", exc.status_code, exc.message, exc.errors)

auth.logout()
print("after logout", session)
