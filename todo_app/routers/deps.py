from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session
from todo_app.database import get_db
from todo_app.errors import AuthError
from todo_app.models.user import User
from todo_app.repositories.todo_repo import SqlAlchemyTodoRepository
from todo_app.repositories.user_repo import RevokedTokenRepository, UserRepository
from todo_app.services.auth_service import AuthService
from todo_app.services.todo_service import TodoService


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return None


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(UserRepository(db), RevokedTokenRepository(db))


def get_todo_service(db: Session = Depends(get_db)) -> TodoService:
    return TodoService(SqlAlchemyTodoRepository(db))


def get_token(authorization: Optional[str] = Header(None)) -> str:
    token = extract_token(authorization)
    if not token:
        raise AuthError()
    return token


def get_current_user(token: str = Depends(get_token), auth: AuthService = Depends(get_auth_service)) -> User:
    return auth.current_user(token)
