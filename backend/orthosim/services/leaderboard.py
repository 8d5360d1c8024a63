"""Glue between the ranking engine and the HTTP layer."""

from uuid import UUID

from fastapi import status
from sqlalchemy.orm import Session

from orthosim.core.app_exceptions import raise_app_error
from orthosim.performance import (
    RankedEntry,
    SqlLeaderboardRepository,
    UpstreamFetchError,
    rank_mentor_cohort,
)
from orthosim.performance.formatting import describe_last_activity
from orthosim.schemas.ranking import RankedTrainee, RankingEntryResponse, TopTraineeResponse


def ranked_cohort(db: Session, mentor_profile_id: UUID, *, persist: bool) -> list[RankedEntry]:
    """Rank one mentor's trainees; a failed fetch becomes 503 RANKING_UNAVAILABLE."""
    try:
        return rank_mentor_cohort(
            SqlLeaderboardRepository(db), mentor_profile_id, persist=persist
        )
    except UpstreamFetchError:
        raise_app_error(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "RANKING_UNAVAILABLE",
            "Rankings are temporarily unavailable",
        )


def to_ranking_response(
    entry: RankedEntry, current_trainee_id: UUID | None = None
) -> RankingEntryResponse:
    member, metrics = entry.member, entry.metrics
    return RankingEntryResponse(
        id=member.trainee_id,
        rank=entry.rank,
        trainee=RankedTrainee(
            name=member.name,
            email=member.email,
            institution=member.institution,
            graduation_year=member.graduation_year,
        ),
        total_attempts=metrics.total_attempts,
        best_score=entry.best_score_display,
        average_score=entry.average_score_display,
        total_training_time=metrics.total_training_time,
        improvement_rate=round(metrics.improvement_rate, 1),
        improvement_rate_available=metrics.improvement_rate_available,
        last_activity=describe_last_activity(metrics.last_activity_at),
        is_current_user=(
            member.trainee_id == current_trainee_id if current_trainee_id is not None else None
        ),
    )


def to_top_trainee(entry: RankedEntry) -> TopTraineeResponse:
    return TopTraineeResponse(
        id=entry.trainee_id,
        rank=entry.rank,
        name=entry.member.name,
        email=entry.member.email,
        best_score=entry.best_score_display,
        average_score=entry.average_score_display,
        total_attempts=entry.metrics.total_attempts,
    )
