"""Pytest configuration and shared fixtures."""

import os
import tempfile
from collections.abc import Generator

# Point the app at a throwaway SQLite file before anything imports settings
_DB_FD, _DB_PATH = tempfile.mkstemp(suffix=".db")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_PATH}"
os.environ["ENV"] = "test"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["GEMINI_API_KEY"] = ""
os.environ["SEED_DEMO_ACCOUNTS"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from orthosim import models  # noqa: E402,F401
from orthosim.db.base import Base  # noqa: E402
from orthosim.db.engine import engine  # noqa: E402
from orthosim.db.session import SessionLocal, get_db  # noqa: E402
from orthosim.main import app  # noqa: E402
from orthosim.models.profile import MentorProfile, TraineeProfile  # noqa: E402
from tests.helpers.seed import auth_headers, create_test_mentor, create_test_trainee  # noqa: E402

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)


def pytest_sessionfinish(session, exitstatus) -> None:
    engine.dispose()
    os.close(_DB_FD)
    if os.path.exists(_DB_PATH):
        os.unlink(_DB_PATH)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh schema per test; the session is for arranging and asserting."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Test client whose requests each get their own session, like production."""

    def override_get_db():
        request_session = SessionLocal()
        try:
            yield request_session
        finally:
            request_session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def mentor(db: Session) -> MentorProfile:
    return create_test_mentor(db, email="mentor@orthosim.io", name="Dr. Mentor")


@pytest.fixture
def trainee(db: Session, mentor: MentorProfile) -> TraineeProfile:
    return create_test_trainee(db, mentor, email="trainee@orthosim.io", name="Tara Trainee")


@pytest.fixture
def mentor_headers(mentor: MentorProfile) -> dict[str, str]:
    return auth_headers(mentor.user)


@pytest.fixture
def trainee_headers(trainee: TraineeProfile) -> dict[str, str]:
    return auth_headers(trainee.user)
