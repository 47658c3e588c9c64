"""Demo data: a todo factory and a seeder for the first user.

Run ``python -m todo_app.seed`` against the configured database.
"""

import argparse
import logging
import random
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session
from todo_app.database import Base, SessionLocal, engine
from todo_app.logs import configure_logging
from todo_app.models import Todo, User
from todo_app.repositories.user_repo import UserRepository
from todo_app.utils.auth import hash_password

logger = logging.getLogger(__name__)

DEMO_USER = {"name": "Test User", "email": "test@example.com", "password": "password123"}

SAMPLE_TODOS = [
    ("Set up the database", "Configure the database connection and create the tables.", True),
    ("Implement CRUD API endpoints", "Create endpoints for creating, reading, updating and deleting todos.", True),
    ("Add input validation", "Validate API requests so bad data never reaches the database.", True),
    ("Add user authentication", "Registration, login and bearer tokens.", False),
    ("Write comprehensive tests", "Cover the API and the client layer.", False),
    ("Build the frontend components", "List, form and item components for the dashboard.", False),
    ("Document the API", "Describe every endpoint with request and response examples.", False),
    ("Optimize performance", "Review queries and frontend rendering.", False),
    ("Deploy to production", "Set up a deployment pipeline.", False),
    ("Plan the next release", None, False),
]

_WORDS = "review plan write call email fix update prepare clean organize read book order check".split()
_NOUNS = "report budget kitchen invoice slides garden notes backlog tickets groceries".split()


def make_todo(user: User, rng: Optional[random.Random] = None, **overrides) -> Todo:
    """Build (but do not persist) a plausible todo owned by ``user``.

    Roughly 20% come out completed and 70% get a due date within two months.
    Keyword overrides win over the random values, e.g. ``completed=True`` or
    ``due_date=None``.
    """
    rng = rng or random.Random()
    fields = {
        "title": f"{rng.choice(_WORDS).capitalize()} {rng.choice(_NOUNS)}",
        "description": rng.choice([None, f"Remember to {rng.choice(_WORDS)} the {rng.choice(_NOUNS)}."]),
        "completed": rng.random() < 0.2,
        "due_date": date.today() + timedelta(days=rng.randint(0, 60)) if rng.random() < 0.7 else None,
    }
    fields.update(overrides)
    return Todo(user_id=user.id, **fields)


def make_overdue_todo(user: User, rng: Optional[random.Random] = None) -> Todo:
    rng = rng or random.Random()
    return make_todo(user, rng, completed=False, due_date=date.today() - timedelta(days=rng.randint(1, 30)))


def demo_user(db: Session) -> User:
    """The first user, or a freshly created demo account when the table is empty."""
    users = UserRepository(db)
    user = users.first()
    if user is None:
        user = users.insert(
            User(name=DEMO_USER["name"], email=DEMO_USER["email"], password=hash_password(DEMO_USER["password"]))
        )
        logger.info("Created demo user %s", user.email)
    return user


def seed(db: Session, extra: int = 5, rng: Optional[random.Random] = None) -> List[Todo]:
    user = demo_user(db)
    todos = [
        Todo(title=title, description=description, completed=completed, user_id=user.id)
        for title, description, completed in SAMPLE_TODOS
    ]
    todos += [make_todo(user, rng) for _ in range(extra)]
    db.add_all(todos)
    db.commit()
    logger.info("Seeded %d todos for user %s", len(todos), user.id)
    return todos


def main(argv=None):
    parser = argparse.ArgumentParser(description="Fill the database with demo todos.")
    parser.add_argument("--extra", type=int, default=5, help="random todos to add after the fixed samples")
    args = parser.parse_args(argv)

    configure_logging()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed(db, extra=args.extra)
    finally:
        db.close()


if __name__ == "__main__":
    main()
