"""Mentor and trainee profile models."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from orthosim.db.base import Base, utcnow


class MentorProfile(Base):
    """Mentor-side profile; owns the code trainees register with."""

    __tablename__ = "mentor_profiles"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    specialization = Column(String(255), nullable=True)
    qualification = Column(String(255), nullable=True)
    department = Column(String(255), nullable=True)
    mentor_code = Column(String(64), unique=True, nullable=False, index=True)
    is_code_active = Column(Boolean, default=True, nullable=False)
    mentor_code_expiry = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    user = relationship("User", back_populates="mentor_profile")
    trainees = relationship("TraineeProfile", back_populates="mentor")
    feedbacks = relationship("Feedback", back_populates="mentor")


class TraineeProfile(Base):
    """Trainee-side profile, attached to exactly one mentor."""

    __tablename__ = "trainee_profiles"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    mentor_id = Column(
        Uuid(as_uuid=True), ForeignKey("mentor_profiles.id"), nullable=False, index=True
    )
    institution = Column(String(255), nullable=True)
    graduation_year = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    user = relationship("User", back_populates="trainee_profile")
    mentor = relationship("MentorProfile", back_populates="trainees")
    surgery_attempts = relationship(
        "SurgeryAttempt", back_populates="trainee_profile", cascade="all, delete-orphan"
    )
    leaderboard = relationship(
        "LeaderboardEntry",
        back_populates="trainee_profile",
        uselist=False,
        cascade="all, delete-orphan",
    )
