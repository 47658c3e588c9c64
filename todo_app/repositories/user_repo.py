from datetime import datetime, UTC
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session
from todo_app.models.token import RevokedToken
from todo_app.models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.scalars(select(User).where(User.email == email)).first()

    def first(self) -> Optional[User]:
        return self.db.scalars(select(User).order_by(User.id)).first()

    def insert(self, user: User) -> User:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update(self, user: User, changes: dict) -> User:
        for field, value in changes.items():
            setattr(user, field, value)
        self.db.commit()
        self.db.refresh(user)
        return user


class RevokedTokenRepository:
    def __init__(self, db: Session):
        self.db = db

    def is_revoked(self, jti: str) -> bool:
        return self.db.get(RevokedToken, jti) is not None

    def revoke(self, jti: str, user_id: int, expires_at: datetime) -> None:
        if self.is_revoked(jti):
            return
        self.db.add(RevokedToken(jti=jti, user_id=user_id, expires_at=expires_at))
        self.db.commit()

    def purge_expired(self, now: Optional[datetime] = None) -> int:
        """Drop entries whose token would no longer validate anyway."""
        now = now or datetime.now(UTC)
        result = self.db.execute(delete(RevokedToken).where(RevokedToken.expires_at < now))
        self.db.commit()
        return result.rowcount
