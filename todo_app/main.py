import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from todo_app import models  # noqa: F401  registers tables on Base.metadata
from todo_app.config import API_PREFIX, CORS_ORIGINS
from todo_app.database import Base, engine
from todo_app.errors import register_exception_handlers
from todo_app.logs import configure_logging
from todo_app.routers import auth, todos

configure_logging()
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

# Columns added to todos after the first release
ADDITIVE_COLUMNS = {
    "description": "TEXT",
    "completed": "BOOLEAN NOT NULL DEFAULT FALSE",
    "due_date": "DATE",
    "user_id": "INTEGER REFERENCES users(id)",
}


# Ensure new columns exist without Alembic (simple additive migrations)
def ensure_schema(bind=engine):
    try:
        insp = inspect(bind)
        cols = [c["name"] for c in insp.get_columns("todos")]
        with bind.begin() as conn:
            for name, ddl in ADDITIVE_COLUMNS.items():
                if name not in cols:
                    logger.info("Adding missing column todos.%s", name)
                    conn.execute(text(f"ALTER TABLE todos ADD COLUMN {name} {ddl}"))
            # todos from before ownership existed go to the first user
            first_user = conn.execute(text("SELECT id FROM users ORDER BY id LIMIT 1")).scalar()
            if first_user is not None:
                conn.execute(text("UPDATE todos SET user_id = :uid WHERE user_id IS NULL"), {"uid": first_user})
    except SQLAlchemyError:
        # best-effort; startup continues with whatever schema is there
        logger.warning("Schema check failed", exc_info=True)


ensure_schema()

app = FastAPI(title="Todo API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# API routers
app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(auth.legacy_router, prefix=API_PREFIX)
app.include_router(todos.router, prefix=API_PREFIX)


@app.get("/health")
def health_check():
    return {"status": "healthy"}
