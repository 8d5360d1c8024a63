"""Mentor code generation, rotation and validation."""

import secrets
import string
import time
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from orthosim.core.config import settings
from orthosim.core.logging import get_logger
from orthosim.models.profile import MentorProfile

logger = get_logger(__name__)

CODE_PREFIX = "MENTOR_"
_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits
_MAX_GENERATION_TRIES = 5


def generate_mentor_code() -> str:
    """MENTOR_ + last 8 digits of the epoch ms + 4 random characters."""
    stamp = str(int(time.time() * 1000))[-8:]
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(4))
    return f"{CODE_PREFIX}{stamp}{suffix}"


def new_code_expiry(now: datetime | None = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(days=settings.MENTOR_CODE_TTL_DAYS)


def unique_mentor_code(db: Session) -> str:
    for _ in range(_MAX_GENERATION_TRIES):
        code = generate_mentor_code()
        taken = db.query(MentorProfile.id).filter(MentorProfile.mentor_code == code).first()
        if not taken:
            return code
    raise RuntimeError("Could not generate a unique mentor code")


def rotate_mentor_code(db: Session, profile: MentorProfile) -> MentorProfile:
    """Issue a fresh code, re-activate it and restart its validity window."""
    profile.mentor_code = unique_mentor_code(db)
    profile.mentor_code_expiry = new_code_expiry()
    profile.is_code_active = True
    db.commit()
    logger.info(
        "Mentor code rotated",
        extra={"event": "mentor_code_rotated", "mentor_profile_id": str(profile.id)},
    )
    return profile


def is_code_usable(profile: MentorProfile | None, now: datetime | None = None) -> bool:
    if profile is None or not profile.is_code_active:
        return False
    if profile.mentor_code_expiry is None:
        return True
    expiry = profile.mentor_code_expiry
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=timezone.utc)
    return (now or datetime.now(timezone.utc)) <= expiry


def find_usable_mentor(db: Session, code: str) -> MentorProfile | None:
    profile = db.query(MentorProfile).filter(MentorProfile.mentor_code == code).first()
    return profile if is_code_usable(profile) else None
