"""Mentor feedback endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from orthosim.core.app_exceptions import raise_not_found
from orthosim.core.dependencies import get_current_mentor_profile
from orthosim.core.logging import get_logger
from orthosim.db.session import get_db
from orthosim.models.attempt import SurgeryAttempt
from orthosim.models.feedback import Feedback
from orthosim.models.profile import MentorProfile, TraineeProfile
from orthosim.schemas.attempt import FeedbackCreate, FeedbackResponse

logger = get_logger(__name__)

router = APIRouter(tags=["Feedback"])


def _attempt_of_mentor(db: Session, attempt_id: UUID, mentor: MentorProfile) -> SurgeryAttempt:
    """Load an attempt only if it belongs to one of the mentor's trainees."""
    attempt = (
        db.query(SurgeryAttempt)
        .join(TraineeProfile, SurgeryAttempt.trainee_profile_id == TraineeProfile.id)
        .filter(SurgeryAttempt.id == attempt_id, TraineeProfile.mentor_id == mentor.id)
        .first()
    )
    if attempt is None:
        raise_not_found("Surgery attempt not found", code="ATTEMPT_NOT_FOUND")
    return attempt


@router.post(
    "",
    response_model=FeedbackResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Leave feedback",
    description="Comment on (and optionally rate) an attempt by one of your trainees.",
)
async def create_feedback(
    request_data: FeedbackCreate,
    mentor: MentorProfile = Depends(get_current_mentor_profile),
    db: Session = Depends(get_db),
) -> FeedbackResponse:
    attempt = _attempt_of_mentor(db, request_data.surgery_attempt_id, mentor)

    feedback = Feedback(
        surgery_attempt_id=attempt.id,
        mentor_profile_id=mentor.id,
        comment=request_data.comment,
        rating=request_data.rating,
    )
    db.add(feedback)
    db.commit()
    db.refresh(feedback)

    logger.info(
        "Feedback created",
        extra={
            "event": "feedback_created",
            "mentor_profile_id": str(mentor.id),
            "attempt_id": str(attempt.id),
        },
    )
    return FeedbackResponse.model_validate(feedback)


@router.get("", response_model=list[FeedbackResponse], summary="Feedback on an attempt")
async def list_feedback(
    surgery_attempt_id: UUID = Query(...),
    mentor: MentorProfile = Depends(get_current_mentor_profile),
    db: Session = Depends(get_db),
) -> list[FeedbackResponse]:
    attempt = _attempt_of_mentor(db, surgery_attempt_id, mentor)
    return [FeedbackResponse.model_validate(f) for f in attempt.feedbacks]
