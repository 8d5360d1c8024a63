"""Database declarative base.

Model modules register themselves on import; ``orthosim.models`` pulls them
all in so ``Base.metadata`` is complete before tables are created.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
