"""Tests for the deterministic cohort ranker."""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from orthosim.performance.aggregator import AttemptRecord
from orthosim.performance.ranker import CohortMember, rank_cohort

T0 = datetime(2025, 3, 1, tzinfo=timezone.utc)


def _member(*scores, trainee_id: UUID | None = None, name: str = "") -> CohortMember:
    return CohortMember(
        trainee_id=trainee_id or uuid4(),
        name=name,
        attempts=tuple(
            AttemptRecord(score=s, total_time=60, attempt_date=T0 + timedelta(hours=i))
            for i, s in enumerate(scores)
        ),
    )


def test_best_score_orders_cohort():
    a = _member("90%", name="A")
    b = _member("75%", name="B")
    ranked = rank_cohort([b, a])
    assert [(e.rank, e.member.name) for e in ranked] == [(1, "A"), (2, "B")]


def test_tie_on_best_broken_by_average():
    a = _member("90%", "50%", name="A")  # avg 70
    b = _member("90%", "80%", name="B")  # avg 85
    ranked = rank_cohort([a, b])
    assert [e.member.name for e in ranked] == ["B", "A"]


def test_full_tie_broken_by_trainee_id():
    low = UUID("00000000-0000-0000-0000-000000000001")
    high = UUID("ffffffff-0000-0000-0000-000000000001")
    ranked = rank_cohort([_member("80%", trainee_id=high), _member("80%", trainee_id=low)])
    assert [e.trainee_id for e in ranked] == [low, high]
    assert [e.rank for e in ranked] == [1, 2]


def test_members_without_scores_are_excluded():
    scored = _member("70%")
    ranked = rank_cohort([_member(), _member("abc"), scored])
    assert len(ranked) == 1
    assert ranked[0].trainee_id == scored.trainee_id
    assert ranked[0].rank == 1


def test_empty_cohort():
    assert rank_cohort([]) == []


def test_ranking_is_input_order_independent():
    members = [_member("60%"), _member("85%"), _member("85%"), _member("72%", "91%")]
    forward = [(e.rank, e.trainee_id) for e in rank_cohort(members)]
    backward = [(e.rank, e.trainee_id) for e in rank_cohort(list(reversed(members)))]
    assert forward == backward


def test_display_helpers():
    entry = rank_cohort([_member("82%", "abc", "91%")])[0]
    assert entry.best_score_display == "91%"
    assert entry.average_score_display == "86.5%"
