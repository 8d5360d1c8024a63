"""Database engine configuration."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from orthosim.core.config import settings


def create_db_engine(database_url: str | None = None) -> Engine:
    """Create SQLAlchemy engine."""
    url = database_url or settings.DATABASE_URL
    if url.startswith("sqlite"):
        # SQLite is used for local runs and the test suite; the TestClient
        # drives requests from a worker thread.
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=False,
        )
    return create_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
        echo=False,
    )


# Global engine instance
engine = create_db_engine()
