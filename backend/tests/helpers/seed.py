"""Test seed helpers for creating test data."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy.orm import Session

from orthosim.core.security import create_access_token, hash_password
from orthosim.models.attempt import SurgeryAttempt
from orthosim.models.profile import MentorProfile, TraineeProfile
from orthosim.models.user import User, UserType

MENTOR_PASSWORD = "MentorPass123!"
TRAINEE_PASSWORD = "TraineePass123!"


def create_test_mentor(
    db: Session,
    email: str | None = None,
    password: str = MENTOR_PASSWORD,
    name: str = "Test Mentor",
    mentor_code: str | None = None,
    is_code_active: bool = True,
    code_expiry: datetime | None = None,
    **kwargs: Any,
) -> MentorProfile:
    """
    Create a mentor account with its profile.

    The mentor code defaults to a random unique value that is valid for a year.
    """
    suffix = uuid.uuid4().hex[:8]
    user = User(
        name=name,
        email=(email or f"mentor_{suffix}@orthosim.io").lower(),
        password_hash=hash_password(password),
        user_type=UserType.MENTOR.value,
        is_active=kwargs.pop("is_active", True),
    )
    user.mentor_profile = MentorProfile(
        specialization=kwargs.pop("specialization", "Orthopedic Trauma"),
        qualification=kwargs.pop("qualification", "MS Ortho"),
        mentor_code=mentor_code or f"MENTOR_{suffix.upper()}",
        is_code_active=is_code_active,
        mentor_code_expiry=code_expiry or datetime.now(timezone.utc) + timedelta(days=365),
        **kwargs,
    )
    db.add(user)
    db.commit()
    return user.mentor_profile


def create_test_trainee(
    db: Session,
    mentor: MentorProfile,
    email: str | None = None,
    password: str = TRAINEE_PASSWORD,
    name: str = "Test Trainee",
    **kwargs: Any,
) -> TraineeProfile:
    user = User(
        name=name,
        email=(email or f"trainee_{uuid.uuid4().hex[:8]}@orthosim.io").lower(),
        password_hash=hash_password(password),
        user_type=UserType.TRAINEE.value,
        is_active=kwargs.pop("is_active", True),
    )
    user.trainee_profile = TraineeProfile(
        mentor_id=mentor.id,
        institution=kwargs.pop("institution", "City Medical College"),
        graduation_year=kwargs.pop("graduation_year", 2025),
        **kwargs,
    )
    db.add(user)
    db.commit()
    return user.trainee_profile


def add_attempt(
    db: Session,
    trainee: TraineeProfile,
    score: str,
    total_time: int = 600,
    days_ago: float = 0,
    is_completed: bool = True,
    **kwargs: Any,
) -> SurgeryAttempt:
    """Record one attempt ``days_ago`` days in the past."""
    attempt = SurgeryAttempt(
        trainee_profile_id=trainee.id,
        score=score,
        total_time=total_time,
        is_completed=is_completed,
        attempt_date=datetime.now(timezone.utc) - timedelta(days=days_ago),
        **kwargs,
    )
    db.add(attempt)
    db.commit()
    return attempt


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(
        str(user.id),
        user.user_type,
        mentor_profile_id=str(user.mentor_profile_id) if user.mentor_profile_id else None,
        trainee_profile_id=str(user.trainee_profile_id) if user.trainee_profile_id else None,
    )
    return {"Authorization": f"Bearer {token}"}
