import uuid
from datetime import datetime, timedelta, UTC

from jose import jwt
from passlib.context import CryptContext
from todo_app import config
from todo_app.schemas.user import BCRYPT_MAX_BYTES

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=config.BCRYPT_ROUNDS)


def hash_password(password: str):
    """Hash a password after validating bcrypt's 72-byte limit.

    Raises ValueError if the UTF-8 encoding of the password exceeds 72 bytes.
    """
    if isinstance(password, str):
        b = password.encode("utf-8")
        if len(b) > BCRYPT_MAX_BYTES:
            # make the failure explicit and consistent
            raise ValueError("password too long: must be at most 72 bytes when UTF-8 encoded")
    return pwd_context.hash(password)


def verify_password(plain, hashed):
    """Verify a plaintext password against a hash.

    If verification raises a ValueError (for example plain >72 bytes), return False
    to allow the caller to respond with an authentication failure instead of an error.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def create_token(user_id: int) -> str:
    # expiry is read at call-time so tests (and runtime overrides) that modify
    # todo_app.config.ACCESS_TOKEN_EXPIRE_MINUTES take effect immediately
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": str(user_id),
        "jti": uuid.uuid4().hex,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),  # JWT spec uses Unix timestamp
    }
    return jwt.encode(claims, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_token(token: str) -> dict:
    """Return the token's claims; jose validates ``exp`` automatically.

    Raises ``jose.ExpiredSignatureError`` or ``jose.JWTError``.
    """
    return jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
