"""Leaderboard and dashboard response schemas."""

from uuid import UUID

from pydantic import BaseModel


class RankedTrainee(BaseModel):
    name: str
    email: str
    institution: str | None
    graduation_year: int | None


class RankingEntryResponse(BaseModel):
    id: UUID
    rank: int
    trainee: RankedTrainee
    total_attempts: int
    best_score: str
    average_score: str
    total_training_time: int
    improvement_rate: float
    improvement_rate_available: bool
    last_activity: str | None
    is_current_user: bool | None = None


class TopTraineeResponse(BaseModel):
    id: UUID
    rank: int
    name: str
    email: str
    best_score: str
    average_score: str
    total_attempts: int


class MentorDashboardStats(BaseModel):
    total_trainees: int
    active_trainees: int
    total_attempts: int
    average_score: float
    total_training_hours: int
    feedback_given: int


class TraineeDashboardStats(BaseModel):
    total_attempts: int
    completed_attempts: int
    average_score: int
    best_score: int
    total_training_hours: int
    improvement_rate: int
    improvement_rate_available: bool
    feedback_received: int
    current_rank: int | None
    mentor_name: str | None
