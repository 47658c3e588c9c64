from sqlalchemy import Column, DateTime, Integer, String
from todo_app.database import Base


class RevokedToken(Base):
    """A bearer token invalidated by logout, kept until it would expire anyway."""

    __tablename__ = "revoked_tokens"

    jti = Column(String(64), primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
