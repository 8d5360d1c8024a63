"""Mentor and trainee profile schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from orthosim.schemas.auth import GRADUATION_YEAR_LOOKAHEAD, MIN_GRADUATION_YEAR


class MentorProfileResponse(BaseModel):
    id: UUID
    name: str
    email: str
    specialization: str | None
    qualification: str | None
    department: str | None
    mentor_code: str
    mentor_code_expiry: datetime | None
    is_code_active: bool
    created_at: datetime


class MentorProfileUpdate(BaseModel):
    """Partial update; omitted fields are left alone."""

    name: str | None = Field(default=None, min_length=2, max_length=255)
    email: EmailStr | None = None
    specialization: str | None = Field(default=None, max_length=255)
    qualification: str | None = Field(default=None, max_length=255)
    department: str | None = Field(default=None, max_length=255)

    @field_validator("name", "email", mode="before")
    @classmethod
    def reject_null(cls, v: str | None) -> str:
        # Backed by NOT NULL columns: omit to keep, never clear
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return v.lower().strip() if v else v


class MentorCodeResponse(BaseModel):
    mentor_code: str
    mentor_code_expiry: datetime | None = None
    is_code_active: bool = True


class TraineeProfileResponse(BaseModel):
    id: UUID
    name: str
    email: str
    institution: str | None
    graduation_year: int | None
    mentor_name: str | None
    mentor_email: str | None
    mentor_specialization: str | None
    created_at: datetime


class TraineeProfileUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=255)
    email: EmailStr | None = None
    institution: str | None = Field(default=None, max_length=255)
    graduation_year: int | None = Field(
        default=None,
        ge=MIN_GRADUATION_YEAR,
        le=datetime.now().year + GRADUATION_YEAR_LOOKAHEAD,
    )

    @field_validator("name", "email", mode="before")
    @classmethod
    def reject_null(cls, v: str | None) -> str:
        # Backed by NOT NULL columns: omit to keep, never clear
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return v.lower().strip() if v else v


class TraineeSummary(BaseModel):
    """Row of the mentor's trainee list."""

    id: UUID
    name: str
    email: str
    profile_image: str | None
    institution: str | None
    graduation_year: int | None
    total_attempts: int
    average_score: str
    last_activity: str
    status: str
