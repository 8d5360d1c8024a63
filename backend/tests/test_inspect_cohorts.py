"""Tests for the cohort inspection script."""

import uuid

from scripts.inspect_cohorts import find_dangling_trainees, print_cohorts
from tests.helpers.seed import add_attempt, create_test_trainee


def test_reports_dangling_mentor_reference(db, mentor, trainee, capsys):
    orphan = create_test_trainee(db, mentor, name="Orphan")
    # SQLite does not enforce foreign keys by default
    orphan.mentor_id = uuid.uuid4()
    db.commit()

    dangling = find_dangling_trainees(db)
    assert [t.id for t in dangling] == [orphan.id]

    assert print_cohorts(db) == 1
    out = capsys.readouterr().out
    assert "Orphan" in out
    assert "Tara Trainee" in out


def test_prints_ranking_for_one_mentor(db, mentor, trainee, capsys):
    add_attempt(db, trainee, "88%")
    assert print_cohorts(db, mentor_code=mentor.mentor_code, rank=True) == 0
    out = capsys.readouterr().out
    assert "#1 Tara Trainee: best 88%, avg 88.0%" in out
    assert "Every trainee is attached" in out
