"""Mentor endpoints: profile, mentor code, trainees, rankings and dashboard."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from orthosim.core.app_exceptions import raise_app_error
from orthosim.core.config import settings
from orthosim.core.dependencies import get_current_mentor_profile
from orthosim.db.session import get_db
from orthosim.models.profile import MentorProfile
from orthosim.models.user import User
from orthosim.schemas.attempt import RecentAttemptResponse
from orthosim.schemas.profile import (
    MentorCodeResponse,
    MentorProfileResponse,
    MentorProfileUpdate,
    TraineeSummary,
)
from orthosim.schemas.ranking import (
    MentorDashboardStats,
    RankingEntryResponse,
    TopTraineeResponse,
)
from orthosim.services import dashboard
from orthosim.services.leaderboard import ranked_cohort, to_ranking_response, to_top_trainee
from orthosim.services.mentor_codes import rotate_mentor_code

router = APIRouter(tags=["Mentor"])


def _profile_response(mentor: MentorProfile) -> MentorProfileResponse:
    return MentorProfileResponse(
        id=mentor.id,
        name=mentor.user.name,
        email=mentor.user.email,
        specialization=mentor.specialization,
        qualification=mentor.qualification,
        department=mentor.department,
        mentor_code=mentor.mentor_code,
        mentor_code_expiry=mentor.mentor_code_expiry,
        is_code_active=mentor.is_code_active,
        created_at=mentor.created_at,
    )


@router.get("/profile", response_model=MentorProfileResponse, summary="Get mentor profile")
async def get_profile(
    mentor: MentorProfile = Depends(get_current_mentor_profile),
) -> MentorProfileResponse:
    return _profile_response(mentor)


@router.put("/profile", response_model=MentorProfileResponse, summary="Update mentor profile")
async def update_profile(
    request_data: MentorProfileUpdate,
    mentor: MentorProfile = Depends(get_current_mentor_profile),
    db: Session = Depends(get_db),
) -> MentorProfileResponse:
    """Partial update of the mentor's account and profile fields."""
    changes = request_data.model_dump(exclude_unset=True)

    new_email = changes.pop("email", None)
    if new_email and new_email != mentor.user.email:
        if db.query(User.id).filter(User.email == new_email).first():
            raise_app_error(status.HTTP_409_CONFLICT, "CONFLICT", "Email already registered")
        mentor.user.email = new_email
    if "name" in changes:
        mentor.user.name = changes.pop("name")
    for field, value in changes.items():
        setattr(mentor, field, value)

    db.commit()
    db.refresh(mentor)
    return _profile_response(mentor)


@router.get("/code", response_model=MentorCodeResponse, summary="Get mentor code")
async def get_code(
    mentor: MentorProfile = Depends(get_current_mentor_profile),
) -> MentorCodeResponse:
    return MentorCodeResponse(
        mentor_code=mentor.mentor_code,
        mentor_code_expiry=mentor.mentor_code_expiry,
        is_code_active=mentor.is_code_active,
    )


@router.post(
    "/code",
    response_model=MentorCodeResponse,
    summary="Rotate mentor code",
    description="Issue a new mentor code. The previous code stops working immediately.",
)
async def regenerate_code(
    mentor: MentorProfile = Depends(get_current_mentor_profile),
    db: Session = Depends(get_db),
) -> MentorCodeResponse:
    mentor = rotate_mentor_code(db, mentor)
    return MentorCodeResponse(
        mentor_code=mentor.mentor_code,
        mentor_code_expiry=mentor.mentor_code_expiry,
        is_code_active=mentor.is_code_active,
    )


@router.get("/trainees", response_model=list[TraineeSummary], summary="List trainees")
async def list_trainees(
    mentor: MentorProfile = Depends(get_current_mentor_profile),
    db: Session = Depends(get_db),
) -> list[TraineeSummary]:
    return dashboard.mentor_trainee_summaries(db, mentor, settings.ACTIVE_WINDOW_DAYS)


@router.get(
    "/rankings",
    response_model=list[RankingEntryResponse],
    summary="Cohort rankings",
    description="Rank the mentor's trainees and refresh their stored leaderboard rows.",
)
async def rankings(
    mentor: MentorProfile = Depends(get_current_mentor_profile),
    db: Session = Depends(get_db),
) -> list[RankingEntryResponse]:
    ranked = ranked_cohort(db, mentor.id, persist=True)
    return [to_ranking_response(entry) for entry in ranked]


@router.get(
    "/dashboard/stats", response_model=MentorDashboardStats, summary="Mentor dashboard stats"
)
async def dashboard_stats(
    mentor: MentorProfile = Depends(get_current_mentor_profile),
    db: Session = Depends(get_db),
) -> MentorDashboardStats:
    return dashboard.mentor_stats(db, mentor)


@router.get(
    "/dashboard/recent-attempts",
    response_model=list[RecentAttemptResponse],
    summary="Recent trainee attempts",
)
async def recent_attempts(
    limit: int = Query(dashboard.RECENT_ATTEMPTS_DEFAULT, ge=1, le=100),
    mentor: MentorProfile = Depends(get_current_mentor_profile),
    db: Session = Depends(get_db),
) -> list[RecentAttemptResponse]:
    return dashboard.recent_attempts(db, mentor, limit=limit)


@router.get(
    "/dashboard/top-trainees",
    response_model=list[TopTraineeResponse],
    summary="Top trainees",
    description="Head of the cohort ranking. Does not touch stored leaderboard rows.",
)
async def top_trainees(
    limit: int | None = Query(None, ge=1, le=100),
    mentor: MentorProfile = Depends(get_current_mentor_profile),
    db: Session = Depends(get_db),
) -> list[TopTraineeResponse]:
    ranked = ranked_cohort(db, mentor.id, persist=False)
    return [to_top_trainee(entry) for entry in (ranked[:limit] if limit else ranked)]
