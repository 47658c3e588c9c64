import logging
from datetime import datetime, UTC
from typing import Optional, Tuple

from jose import ExpiredSignatureError, JWTError
from sqlalchemy.exc import IntegrityError
from todo_app.errors import AuthError, ValidationError
from todo_app.models.user import User
from todo_app.repositories.user_repo import RevokedTokenRepository, UserRepository
from todo_app.schemas.user import UserCreate, UserUpdate
from todo_app.utils.auth import create_token, decode_token, hash_password, verify_password

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "The email has already been taken."


class AuthService:
    """Issues and validates bearer tokens and manages the user's own profile."""

    def __init__(self, users: UserRepository, revoked: RevokedTokenRepository):
        self.users = users
        self.revoked = revoked

    def register(self, payload: UserCreate) -> Tuple[User, str]:
        if self.users.find_by_email(payload.email):
            raise ValidationError({"email": [EMAIL_TAKEN]})

        user = User(name=payload.name, email=payload.email, password=hash_password(payload.password))
        try:
            user = self.users.insert(user)
        except IntegrityError:
            # lost a race with a concurrent registration for the same email
            self.users.db.rollback()
            raise ValidationError({"email": [EMAIL_TAKEN]})
        logger.info("Registered user %s", user.id)
        return user, create_token(user.id)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        user = self.users.find_by_email(email)
        if not user or not verify_password(password, user.password):
            logger.warning("Failed login for %s", email)
            raise AuthError("Invalid login credentials")
        return user, create_token(user.id)

    def current_user(self, token: Optional[str]) -> User:
        claims = self._claims(token)
        user = self.users.find_by_id(claims["sub"])
        if user is None:
            raise AuthError("Invalid token: unknown user")
        return user

    def logout(self, token: str) -> None:
        claims = self._claims(token)
        expires_at = datetime.fromtimestamp(claims["exp"], UTC)
        self.revoked.revoke(claims["jti"], claims["sub"], expires_at)
        self.revoked.purge_expired()
        logger.info("User %s logged out", claims["sub"])

    def update_profile(self, user: User, payload: UserUpdate) -> User:
        changes = payload.changes()
        if "email" in changes and changes["email"] != user.email:
            other = self.users.find_by_email(changes["email"])
            if other is not None and other.id != user.id:
                raise ValidationError({"email": [EMAIL_TAKEN]})
        if "password" in changes:
            if payload.password_confirmation is None:
                raise ValidationError({"password": ["The password field confirmation does not match."]})
            changes["password"] = hash_password(changes["password"])
        user = self.users.update(user, changes)
        logger.info("User %s updated profile (%s)", user.id, ", ".join(sorted(changes)) or "no changes")
        return user

    def _claims(self, token: Optional[str]) -> dict:
        if not token:
            raise AuthError()
        try:
            # jwt.decode validates exp automatically
            claims = decode_token(token)
        except ExpiredSignatureError:
            raise AuthError("Token has expired")
        except JWTError:
            raise AuthError("Invalid token")
        try:
            claims["sub"] = int(claims["sub"])
        except (KeyError, TypeError, ValueError):
            raise AuthError("Invalid token: missing user")
        if not claims.get("jti") or "exp" not in claims:
            raise AuthError("Invalid token")
        if self.revoked.is_revoked(claims["jti"]):
            raise AuthError("Token has been revoked")
        return claims
