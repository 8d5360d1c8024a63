"""Dashboard aggregates for mentors and trainees."""

from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from orthosim.models.attempt import SurgeryAttempt
from orthosim.models.feedback import Feedback
from orthosim.models.profile import MentorProfile, TraineeProfile
from orthosim.performance.aggregator import NoData, compute_trainee_metrics, parse_score
from orthosim.performance.formatting import (
    activity_status,
    as_utc,
    describe_last_activity,
    format_percent,
    to_hours,
)
from orthosim.performance.service import member_from_profile
from orthosim.schemas.attempt import RecentAttemptResponse
from orthosim.schemas.profile import TraineeSummary
from orthosim.schemas.ranking import MentorDashboardStats, TraineeDashboardStats

RECENT_ATTEMPTS_DEFAULT = 10


def _mentor_trainees(db: Session, mentor_id: UUID) -> list[TraineeProfile]:
    return (
        db.query(TraineeProfile)
        .options(
            selectinload(TraineeProfile.user),
            selectinload(TraineeProfile.surgery_attempts),
        )
        .filter(TraineeProfile.mentor_id == mentor_id)
        .order_by(TraineeProfile.created_at, TraineeProfile.id)
        .all()
    )


def mentor_stats(db: Session, mentor: MentorProfile) -> MentorDashboardStats:
    trainees = _mentor_trainees(db, mentor.id)
    attempts = [a for t in trainees for a in t.surgery_attempts]

    scores = [
        s for s in (parse_score(a.score) for a in attempts if a.is_completed) if s is not None
    ]
    feedback_given = (
        db.query(func.count(Feedback.id)).filter(Feedback.mentor_profile_id == mentor.id).scalar()
    )

    return MentorDashboardStats(
        total_trainees=len(trainees),
        active_trainees=sum(1 for t in trainees if t.surgery_attempts),
        total_attempts=len(attempts),
        average_score=sum(scores) / len(scores) if scores else 0.0,
        total_training_hours=to_hours(sum(a.total_time or 0 for a in attempts)),
        feedback_given=feedback_given or 0,
    )


def mentor_trainee_summaries(
    db: Session, mentor: MentorProfile, active_window_days: int
) -> list[TraineeSummary]:
    summaries: list[TraineeSummary] = []
    for trainee in _mentor_trainees(db, mentor.id):
        metrics = compute_trainee_metrics(member_from_profile(trainee).attempts)
        attempts = trainee.surgery_attempts
        last_seen = max(
            (as_utc(a.attempt_date) for a in attempts), default=as_utc(trainee.user.created_at)
        )
        average = 0.0 if isinstance(metrics, NoData) else metrics.average_score
        summaries.append(
            TraineeSummary(
                id=trainee.id,
                name=trainee.user.name,
                email=trainee.user.email,
                profile_image=trainee.user.profile_image,
                institution=trainee.institution,
                graduation_year=trainee.graduation_year,
                total_attempts=len(attempts),
                average_score=format_percent(average, decimals=1),
                last_activity=describe_last_activity(last_seen),
                status=activity_status(last_seen, window_days=active_window_days),
            )
        )
    return summaries


def recent_attempts(
    db: Session, mentor: MentorProfile, limit: int = RECENT_ATTEMPTS_DEFAULT
) -> list[RecentAttemptResponse]:
    rows = (
        db.query(SurgeryAttempt)
        .join(TraineeProfile, SurgeryAttempt.trainee_profile_id == TraineeProfile.id)
        .options(
            selectinload(SurgeryAttempt.trainee_profile).selectinload(TraineeProfile.user),
            selectinload(SurgeryAttempt.feedbacks),
        )
        .filter(TraineeProfile.mentor_id == mentor.id)
        .order_by(SurgeryAttempt.attempt_date.desc())
        .limit(limit)
        .all()
    )
    return [
        RecentAttemptResponse(
            id=a.id,
            trainee_name=a.trainee_profile.user.name,
            score=a.score,
            attempt_date=a.attempt_date,
            is_completed=a.is_completed,
            feedback_count=len(a.feedbacks),
        )
        for a in rows
    ]


def trainee_stats(db: Session, trainee: TraineeProfile) -> TraineeDashboardStats:
    attempts = trainee.surgery_attempts
    metrics = compute_trainee_metrics(member_from_profile(trainee).attempts)

    feedback_received = (
        db.query(func.count(Feedback.id))
        .join(SurgeryAttempt, Feedback.surgery_attempt_id == SurgeryAttempt.id)
        .filter(SurgeryAttempt.trainee_profile_id == trainee.id)
        .scalar()
    )
    mentor_name = trainee.mentor.user.name if trainee.mentor and trainee.mentor.user else None

    if isinstance(metrics, NoData):
        average = best = improvement = 0
        improvement_available = False
    else:
        average = round(metrics.average_score)
        best = metrics.best_score
        improvement = round(metrics.improvement_rate)
        improvement_available = metrics.improvement_rate_available

    return TraineeDashboardStats(
        total_attempts=len(attempts),
        completed_attempts=sum(1 for a in attempts if a.is_completed),
        average_score=average,
        best_score=best,
        total_training_hours=to_hours(sum(a.total_time or 0 for a in attempts)),
        improvement_rate=improvement,
        improvement_rate_available=improvement_available,
        feedback_received=feedback_received or 0,
        current_rank=trainee.leaderboard.rank if trainee.leaderboard else None,
        mentor_name=mentor_name,
    )
