"""Trainee endpoints: profile, attempts, rankings, dashboard and feedback."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session, selectinload

from orthosim.core.app_exceptions import raise_app_error, raise_not_found
from orthosim.core.dependencies import get_current_trainee_profile
from orthosim.core.logging import get_logger
from orthosim.core.security import hash_password, verify_password
from orthosim.core.security_logging import log_security_event
from orthosim.db.session import get_db
from orthosim.models.attempt import SurgeryAttempt
from orthosim.models.feedback import Feedback
from orthosim.models.profile import MentorProfile, TraineeProfile
from orthosim.models.user import User
from orthosim.schemas.attempt import AttemptCreate, AttemptResponse, FeedbackResponse
from orthosim.schemas.auth import ChangePasswordRequest, StatusResponse
from orthosim.schemas.profile import TraineeProfileResponse, TraineeProfileUpdate
from orthosim.schemas.ranking import RankingEntryResponse, TraineeDashboardStats
from orthosim.services import dashboard
from orthosim.services.leaderboard import ranked_cohort, to_ranking_response

logger = get_logger(__name__)

router = APIRouter(tags=["Trainee"])


def _profile_response(trainee: TraineeProfile) -> TraineeProfileResponse:
    mentor = trainee.mentor
    return TraineeProfileResponse(
        id=trainee.id,
        name=trainee.user.name,
        email=trainee.user.email,
        institution=trainee.institution,
        graduation_year=trainee.graduation_year,
        mentor_name=mentor.user.name if mentor else None,
        mentor_email=mentor.user.email if mentor else None,
        mentor_specialization=mentor.specialization if mentor else None,
        created_at=trainee.created_at,
    )


@router.get("/profile", response_model=TraineeProfileResponse, summary="Get trainee profile")
async def get_profile(
    trainee: TraineeProfile = Depends(get_current_trainee_profile),
) -> TraineeProfileResponse:
    return _profile_response(trainee)


@router.put("/profile", response_model=TraineeProfileResponse, summary="Update trainee profile")
async def update_profile(
    request_data: TraineeProfileUpdate,
    trainee: TraineeProfile = Depends(get_current_trainee_profile),
    db: Session = Depends(get_db),
) -> TraineeProfileResponse:
    changes = request_data.model_dump(exclude_unset=True)

    new_email = changes.pop("email", None)
    if new_email and new_email != trainee.user.email:
        if db.query(User.id).filter(User.email == new_email).first():
            raise_app_error(status.HTTP_409_CONFLICT, "CONFLICT", "Email already registered")
        trainee.user.email = new_email
    if "name" in changes:
        trainee.user.name = changes.pop("name")
    for field, value in changes.items():
        setattr(trainee, field, value)

    db.commit()
    db.refresh(trainee)
    return _profile_response(trainee)


@router.post(
    "/change-password",
    response_model=StatusResponse,
    summary="Change password",
    description="Verify the current password and set a new one.",
)
async def change_password(
    request_data: ChangePasswordRequest,
    request: Request,
    trainee: TraineeProfile = Depends(get_current_trainee_profile),
    db: Session = Depends(get_db),
) -> StatusResponse:
    user = trainee.user
    if not verify_password(request_data.current_password, user.password_hash):
        log_security_event(
            request,
            event_type="auth_password_change",
            outcome="deny",
            reason_code="INVALID_CURRENT_PASSWORD",
            user_id=str(user.id),
        )
        raise_app_error(
            status.HTTP_400_BAD_REQUEST,
            "INVALID_CURRENT_PASSWORD",
            "Current password is incorrect",
        )

    user.password_hash = hash_password(request_data.new_password)
    db.commit()
    log_security_event(
        request, event_type="auth_password_change", outcome="allow", user_id=str(user.id)
    )
    return StatusResponse(message="Password updated successfully")


@router.get(
    "/attempts",
    response_model=list[AttemptResponse],
    summary="List my attempts",
    description="Newest first, with stage metrics and mentor feedback.",
)
async def list_attempts(
    trainee: TraineeProfile = Depends(get_current_trainee_profile),
    db: Session = Depends(get_db),
) -> list[AttemptResponse]:
    attempts = (
        db.query(SurgeryAttempt)
        .options(
            selectinload(SurgeryAttempt.feedbacks)
            .selectinload(Feedback.mentor)
            .selectinload(MentorProfile.user)
        )
        .filter(SurgeryAttempt.trainee_profile_id == trainee.id)
        .order_by(SurgeryAttempt.attempt_date.desc())
        .all()
    )
    return [AttemptResponse.model_validate(a) for a in attempts]


@router.post(
    "/attempts",
    response_model=AttemptResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record an attempt",
    description="Upload a simulator run. The score is stored as reported.",
)
async def create_attempt(
    request_data: AttemptCreate,
    trainee: TraineeProfile = Depends(get_current_trainee_profile),
    db: Session = Depends(get_db),
) -> AttemptResponse:
    values = request_data.model_dump(exclude_none=True)
    attempt = SurgeryAttempt(trainee_profile_id=trainee.id, **values)
    db.add(attempt)
    db.commit()
    db.refresh(attempt)

    logger.info(
        "Surgery attempt recorded",
        extra={
            "event": "attempt_recorded",
            "trainee_profile_id": str(trainee.id),
            "attempt_id": str(attempt.id),
            "is_completed": attempt.is_completed,
        },
    )
    return AttemptResponse.model_validate(attempt)


@router.get(
    "/rankings",
    response_model=list[RankingEntryResponse],
    summary="Cohort rankings",
    description="Ranking among all trainees sharing the caller's mentor. Read-only.",
)
async def rankings(
    trainee: TraineeProfile = Depends(get_current_trainee_profile),
    db: Session = Depends(get_db),
) -> list[RankingEntryResponse]:
    ranked = ranked_cohort(db, trainee.mentor_id, persist=False)
    return [to_ranking_response(entry, current_trainee_id=trainee.id) for entry in ranked]


@router.get(
    "/dashboard/stats", response_model=TraineeDashboardStats, summary="Trainee dashboard stats"
)
async def dashboard_stats(
    trainee: TraineeProfile = Depends(get_current_trainee_profile),
    db: Session = Depends(get_db),
) -> TraineeDashboardStats:
    return dashboard.trainee_stats(db, trainee)


@router.get(
    "/feedback",
    response_model=list[FeedbackResponse],
    summary="Feedback on one of my attempts",
)
async def attempt_feedback(
    surgery_attempt_id: UUID = Query(...),
    trainee: TraineeProfile = Depends(get_current_trainee_profile),
    db: Session = Depends(get_db),
) -> list[FeedbackResponse]:
    attempt = (
        db.query(SurgeryAttempt)
        .filter(
            SurgeryAttempt.id == surgery_attempt_id,
            SurgeryAttempt.trainee_profile_id == trainee.id,
        )
        .first()
    )
    if attempt is None:
        raise_not_found("Surgery attempt not found", code="ATTEMPT_NOT_FOUND")
    return [FeedbackResponse.model_validate(f) for f in attempt.feedbacks]
