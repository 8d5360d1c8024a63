"""Seed a demo mentor and trainee for local development."""

from orthosim.core.config import settings
from orthosim.core.logging import get_logger
from orthosim.core.security import hash_password
from orthosim.db.session import session_scope
from orthosim.models.profile import MentorProfile, TraineeProfile
from orthosim.models.user import User, UserType
from orthosim.services.mentor_codes import new_code_expiry

logger = get_logger(__name__)

DEMO_MENTOR_EMAIL = "mentor@orthosim.io"
DEMO_TRAINEE_EMAIL = "trainee@orthosim.io"
DEMO_MENTOR_CODE = "MENTOR_DEMO0001"


def seed_demo_accounts() -> None:
    """Create one mentor with one attached trainee, if enabled and missing."""
    if settings.ENV != "dev" or not settings.SEED_DEMO_ACCOUNTS:
        logger.info("Demo account seeding skipped (ENV != dev or SEED_DEMO_ACCOUNTS=false)")
        return

    try:
        with session_scope() as db:
            mentor_user = db.query(User).filter(User.email == DEMO_MENTOR_EMAIL).first()
            if mentor_user is None:
                mentor_user = User(
                    name="Demo Mentor",
                    email=DEMO_MENTOR_EMAIL,
                    password_hash=hash_password("Mentor123!"),
                    user_type=UserType.MENTOR.value,
                )
                mentor_user.mentor_profile = MentorProfile(
                    specialization="Orthopedic Trauma",
                    qualification="FRCS (Orth)",
                    mentor_code=DEMO_MENTOR_CODE,
                    mentor_code_expiry=new_code_expiry(),
                )
                db.add(mentor_user)
                db.flush()
                logger.info(f"Created demo mentor account: {DEMO_MENTOR_EMAIL} / Mentor123!")

            if not db.query(User).filter(User.email == DEMO_TRAINEE_EMAIL).first():
                trainee_user = User(
                    name="Demo Trainee",
                    email=DEMO_TRAINEE_EMAIL,
                    password_hash=hash_password("Trainee123!"),
                    user_type=UserType.TRAINEE.value,
                )
                trainee_user.trainee_profile = TraineeProfile(
                    mentor_id=mentor_user.mentor_profile.id,
                    institution="Demo Medical College",
                    graduation_year=2026,
                )
                db.add(trainee_user)
                logger.info(f"Created demo trainee account: {DEMO_TRAINEE_EMAIL} / Trainee123!")
    except Exception as e:
        logger.error(f"Error seeding demo accounts: {e}", exc_info=True)
        raise
