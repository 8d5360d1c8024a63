"""Ranking engine: fetch a cohort, rank it, persist leaderboard rows best-effort.

Persistence is injected through ``LeaderboardRepository`` so the engine never
reaches for a process-wide database client. A failed fetch aborts the whole
computation; a failed upsert only costs that one row.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from orthosim.models.leaderboard import LeaderboardEntry
from orthosim.models.profile import TraineeProfile
from orthosim.performance.aggregator import AttemptRecord
from orthosim.performance.formatting import as_utc
from orthosim.performance.ranker import CohortMember, RankedEntry, rank_cohort

logger = logging.getLogger(__name__)


class RankingError(Exception):
    """Base class for ranking failures."""


class UpstreamFetchError(RankingError):
    """Cohort or attempt data could not be retrieved."""


class PersistenceError(RankingError):
    """A single leaderboard upsert failed."""


class LeaderboardRepository(Protocol):
    def fetch_cohort(self, mentor_profile_id: UUID) -> list[CohortMember]: ...

    def upsert_entry(self, entry: RankedEntry) -> None: ...


class SqlLeaderboardRepository:
    """SQLAlchemy-backed cohort fetch and leaderboard upsert."""

    def __init__(self, db: Session):
        self.db = db

    def fetch_cohort(self, mentor_profile_id: UUID) -> list[CohortMember]:
        try:
            trainees = (
                self.db.query(TraineeProfile)
                .options(
                    selectinload(TraineeProfile.user),
                    selectinload(TraineeProfile.surgery_attempts),
                )
                .filter(TraineeProfile.mentor_id == mentor_profile_id)
                .order_by(TraineeProfile.created_at, TraineeProfile.id)
                .all()
            )
        except SQLAlchemyError as e:
            raise UpstreamFetchError(f"Failed to load cohort for mentor {mentor_profile_id}") from e

        return [member_from_profile(t) for t in trainees]

    def upsert_entry(self, entry: RankedEntry) -> None:
        metrics = entry.metrics
        try:
            row = (
                self.db.query(LeaderboardEntry)
                .filter(LeaderboardEntry.trainee_profile_id == entry.trainee_id)
                .one_or_none()
            )
            if row is None:
                row = LeaderboardEntry(trainee_profile_id=entry.trainee_id)
                self.db.add(row)
            row.rank = entry.rank
            row.best_score = metrics.best_score
            row.average_score = metrics.average_score
            row.total_attempts = metrics.total_attempts
            row.total_training_time = metrics.total_training_time
            self.db.commit()
        except Exception as e:
            # drop the pending row so later upserts start clean
            self.db.rollback()
            raise PersistenceError(f"Leaderboard upsert failed for trainee {entry.trainee_id}") from e


def member_from_profile(trainee: TraineeProfile) -> CohortMember:
    """Build a ranking input from a trainee profile with loaded attempts."""
    attempts = sorted(trainee.surgery_attempts, key=lambda a: as_utc(a.attempt_date))
    return CohortMember(
        trainee_id=trainee.id,
        user_id=trainee.user_id,
        name=trainee.user.name if trainee.user else "",
        email=trainee.user.email if trainee.user else "",
        institution=trainee.institution,
        graduation_year=trainee.graduation_year,
        attempts=tuple(
            AttemptRecord(
                score=a.score,
                total_time=a.total_time or 0,
                attempt_date=as_utc(a.attempt_date),
                is_completed=bool(a.is_completed),
            )
            for a in attempts
        ),
    )


def compute_cohort_ranking(
    cohort: Sequence[CohortMember],
    repository: LeaderboardRepository | None = None,
) -> list[RankedEntry]:
    """
    Rank a cohort and, when a repository is given, persist each entry.

    Returns the full ranked list even when some upserts fail; every skipped
    upsert is logged as a warning.
    """
    ranked = rank_cohort(cohort)
    if repository is None:
        return ranked

    failed = 0
    for entry in ranked:
        try:
            repository.upsert_entry(entry)
        except Exception as e:  # any backend failure: skip this row
            failed += 1
            logger.warning(
                "Skipping leaderboard upsert",
                extra={
                    "event": "leaderboard_upsert_skipped",
                    "trainee_id": str(entry.trainee_id),
                    "rank": entry.rank,
                    "error": str(e),
                },
            )

    logger.info(
        "Cohort ranking computed",
        extra={
            "event": "cohort_ranked",
            "cohort_size": len(cohort),
            "ranked": len(ranked),
            "persist_failures": failed,
        },
    )
    return ranked


def rank_mentor_cohort(
    repository: LeaderboardRepository,
    mentor_profile_id: UUID,
    *,
    persist: bool = True,
) -> list[RankedEntry]:
    """Fetch all trainees of one mentor and rank them.

    Raises:
        UpstreamFetchError: if the cohort cannot be loaded; no partial ranking
        is returned.
    """
    cohort = repository.fetch_cohort(mentor_profile_id)
    return compute_cohort_ranking(cohort, repository if persist else None)
