"""Mentor feedback on surgery attempts."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import relationship

from orthosim.db.base import Base, utcnow


class Feedback(Base):
    """Mentor comment (and optional 1-5 rating) on one attempt."""

    __tablename__ = "feedbacks"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    surgery_attempt_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("surgery_attempts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    mentor_profile_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("mentor_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    comment = Column(Text, nullable=False)
    rating = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    surgery_attempt = relationship("SurgeryAttempt", back_populates="feedbacks")
    mentor = relationship("MentorProfile", back_populates="feedbacks")

    __table_args__ = (
        CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_feedback_rating"),
    )

    @property
    def mentor_name(self) -> str | None:
        if self.mentor is None or self.mentor.user is None:
            return None
        return self.mentor.user.name
