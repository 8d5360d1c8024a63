"""Database models."""

# Import all models here so Alembic can detect them
from orthosim.models.attempt import SurgeryAttempt
from orthosim.models.chat import AIChatLog
from orthosim.models.feedback import Feedback
from orthosim.models.leaderboard import LeaderboardEntry
from orthosim.models.profile import MentorProfile, TraineeProfile
from orthosim.models.user import User, UserType

__all__ = [
    "User",
    "UserType",
    "MentorProfile",
    "TraineeProfile",
    "SurgeryAttempt",
    "Feedback",
    "LeaderboardEntry",
    "AIChatLog",
]
