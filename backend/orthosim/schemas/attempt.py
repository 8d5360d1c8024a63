"""Surgery attempt and feedback schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class FeedbackResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    surgery_attempt_id: UUID
    comment: str
    rating: int | None
    mentor_name: str | None
    created_at: datetime


class FeedbackCreate(BaseModel):
    surgery_attempt_id: UUID
    comment: str = Field(..., min_length=1, max_length=5000)
    rating: int | None = Field(default=None, ge=1, le=5)


class AttemptMetrics(BaseModel):
    """Per-stage measurements reported by the simulator."""

    reduction_duration: int | None = None
    reduction_needed_bone_length: float | None = None
    reduction_actual_bone_length: float | None = None
    reduction_accuracy: float | None = None

    entry_site_duration: int | None = None
    cutting_accuracy: float | None = None
    needed_thandle_depth: float | None = None
    actual_thandle_depth: float | None = None
    thandle_accuracy: float | None = None

    nail_insertion_duration: int | None = None
    needed_wire_depth: float | None = None
    actual_wire_depth: float | None = None
    wire_position_accuracy: float | None = None
    needed_nail_depth: float | None = None
    actual_nail_depth: float | None = None
    nail_position_accuracy: float | None = None

    locking_closure_duration: int | None = None
    steps_accuracy: float | None = None
    step_tool_accuracy: float | None = None
    first_proximal_screw_accuracy: float | None = None
    second_proximal_screw_accuracy: float | None = None
    distal_screw_accuracy: float | None = None

    tool_usage_order: list[str] | None = None
    nail_locking_steps: list[Any] | None = None
    performance_detail: dict[str, Any] | None = None


class AttemptCreate(AttemptMetrics):
    """Simulator upload of a finished (or abandoned) run."""

    score: str = Field(..., min_length=1, max_length=16, examples=["82%"])
    total_time: int = Field(..., ge=0, description="Elapsed seconds")
    is_completed: bool = True
    attempt_date: datetime | None = None
    xray_image_path: str | None = Field(default=None, max_length=1024)


class AttemptResponse(AttemptMetrics):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    attempt_date: datetime
    total_time: int
    score: str
    is_completed: bool
    xray_image_path: str | None = None
    feedbacks: list[FeedbackResponse] = Field(default_factory=list)


class RecentAttemptResponse(BaseModel):
    id: UUID
    trainee_name: str
    score: str
    attempt_date: datetime
    is_completed: bool
    feedback_count: int
