"""Tests for JSON logging setup and the scripted session scope."""

import io
import json
import logging

import pytest

from orthosim.core.config import settings
from orthosim.core.logging import setup_logging
from orthosim.db.session import session_scope
from orthosim.models.user import User
from tests.helpers.seed import create_test_mentor


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_emits_service_fields(restore_root_logger):
    stream = io.StringIO()
    setup_logging(level="debug", stream=stream)

    assert logging.getLogger().level == logging.DEBUG
    logging.getLogger("orthosim.performance.service").warning(
        "Skipping leaderboard upsert", extra={"event": "leaderboard_upsert_skipped", "rank": 3}
    )

    record = json.loads(stream.getvalue().splitlines()[-1])
    assert record["msg"] == "Skipping leaderboard upsert"
    assert record["level"] == "WARNING"
    assert record["service"] == settings.PROJECT_NAME
    assert record["env"] == "test"
    assert record["event"] == "leaderboard_upsert_skipped"
    assert record["rank"] == 3
    assert "location" in record


def test_setup_logging_defaults_to_settings_level(restore_root_logger, monkeypatch):
    monkeypatch.setattr(settings, "LOG_LEVEL", "error")
    setup_logging(stream=io.StringIO())
    assert logging.getLogger().level == logging.ERROR
    assert logging.getLogger("httpx").level == logging.WARNING

    setup_logging(level="nonsense", stream=io.StringIO())
    assert logging.getLogger().level == logging.INFO


def test_session_scope_commits(db):
    mentor = create_test_mentor(db)
    with session_scope() as session:
        session.get(User, mentor.user_id).name = "Dr. Scoped"

    db.expire_all()
    assert db.get(User, mentor.user_id).name == "Dr. Scoped"


def test_session_scope_rolls_back_on_error(db):
    mentor = create_test_mentor(db)
    with pytest.raises(RuntimeError):
        with session_scope() as session:
            session.get(User, mentor.user_id).name = "Dr. Discarded"
            session.flush()
            raise RuntimeError("abort")

    db.expire_all()
    assert db.get(User, mentor.user_id).name != "Dr. Discarded"
