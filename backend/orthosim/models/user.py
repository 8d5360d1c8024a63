"""User model."""

import uuid
from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, String, Uuid
from sqlalchemy.orm import relationship

from orthosim.db.base import Base, utcnow


class UserType(str, Enum):
    """Account type; decides which half of the API a user may reach."""

    MENTOR = "MENTOR"
    TRAINEE = "TRAINEE"


class User(Base):
    """User model."""

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    user_type = Column(String(16), nullable=False, index=True)
    profile_image = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    mentor_profile = relationship(
        "MentorProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    trainee_profile = relationship(
        "TraineeProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    chat_logs = relationship("AIChatLog", back_populates="user", cascade="all, delete-orphan")

    @property
    def mentor_profile_id(self) -> uuid.UUID | None:
        return self.mentor_profile.id if self.mentor_profile else None

    @property
    def trainee_profile_id(self) -> uuid.UUID | None:
        return self.trainee_profile.id if self.trainee_profile else None
