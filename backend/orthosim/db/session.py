"""Database sessions: the request dependency and a scope for scripts."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Generator

from sqlalchemy.orm import Session, sessionmaker

from orthosim.db.engine import engine

# Response models read attributes after commit
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,
)


def get_db() -> Generator[Session, None, None]:
    """Per-request session; endpoints commit their own writes."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session for work outside a request: commit on success, roll back on error."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
