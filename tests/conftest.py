import os
import tempfile
from pathlib import Path

# Point the app at a throwaway database before anything from todo_app is imported
_tmpdir = Path(tempfile.mkdtemp(prefix="todo-app-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_tmpdir / 'test.db'}"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import itertools

import pytest
from fastapi.testclient import TestClient
from todo_app.database import Base, SessionLocal, engine
from todo_app.main import app
from todo_app.models import User
from todo_app.utils.auth import create_token, hash_password

PASSWORD = "Password123"
_counter = itertools.count(1)


# Recreate all tables for each test
@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make_user(name="Test User", email=None, password=PASSWORD):
        email = email or f"user{next(_counter)}@example.com"
        user = User(name=name, email=email, password=hash_password(password))
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user(name="Alice", email="alice@example.com")


@pytest.fixture
def other_user(make_user):
    return make_user(name="Bob", email="bob@example.com")


def bearer(user):
    return {"Authorization": f"Bearer {create_token(user.id)}"}


@pytest.fixture
def auth_headers(user):
    return bearer(user)


@pytest.fixture
def other_headers(other_user):
    return bearer(other_user)
