"""Persisted leaderboard rows."""

import uuid

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, Uuid
from sqlalchemy.orm import relationship

from orthosim.db.base import Base, utcnow


class LeaderboardEntry(Base):
    """Latest computed rank for one trainee.

    Written only by ``orthosim.performance.service``; removed together with
    the trainee profile.
    """

    __tablename__ = "leaderboard_entries"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    trainee_profile_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("trainee_profiles.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    rank = Column(Integer, nullable=False)
    best_score = Column(Integer, nullable=False)
    average_score = Column(Float, nullable=False)
    total_attempts = Column(Integer, nullable=False, default=0)
    total_training_time = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    trainee_profile = relationship("TraineeProfile", back_populates="leaderboard")
