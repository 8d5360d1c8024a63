"""Authentication schemas."""

from datetime import datetime
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from orthosim.core.security import PASSWORD_MAX_LENGTH, check_password_strength

MIN_GRADUATION_YEAR = 1920
GRADUATION_YEAR_LOOKAHEAD = 5


class _RegistrationBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(..., max_length=PASSWORD_MAX_LENGTH)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator("password")
    @classmethod
    def strong_password(cls, v: str) -> str:
        return check_password_strength(v)


class MentorRegistrationRequest(_RegistrationBase):
    user_type: Literal["MENTOR"]
    specialization: str = Field(..., min_length=1, max_length=255)
    qualification: str = Field(..., min_length=1, max_length=255)


class TraineeRegistrationRequest(_RegistrationBase):
    user_type: Literal["TRAINEE"]
    institution: str = Field(..., min_length=1, max_length=255)
    graduation_year: int
    mentor_code: str = Field(..., min_length=1, max_length=64)

    @field_validator("graduation_year")
    @classmethod
    def plausible_year(cls, v: int) -> int:
        latest = datetime.now().year + GRADUATION_YEAR_LOOKAHEAD
        if v < MIN_GRADUATION_YEAR:
            raise ValueError(f"Year must be {MIN_GRADUATION_YEAR} or later")
        if v > latest:
            raise ValueError("Year seems too far in the future")
        return v

    @field_validator("mentor_code")
    @classmethod
    def strip_code(cls, v: str) -> str:
        return v.strip()


RegistrationRequest = Annotated[
    Union[MentorRegistrationRequest, TraineeRegistrationRequest],
    Field(discriminator="user_type"),
]


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize email to lowercase."""
        return v.lower().strip()


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., max_length=PASSWORD_MAX_LENGTH)

    @field_validator("new_password")
    @classmethod
    def strong_password(cls, v: str) -> str:
        return check_password_strength(v)


# Response schemas
class UserResponse(BaseModel):
    """User response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    user_type: str
    profile_image: str | None = None
    mentor_profile_id: UUID | None = None
    trainee_profile_id: UUID | None = None
    created_at: datetime


class RegistrationResponse(BaseModel):
    user: UserResponse
    mentor_code: str | None = None


class TokensResponse(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int


class LoginResponse(BaseModel):
    user: UserResponse
    tokens: TokensResponse


class MeResponse(BaseModel):
    user: UserResponse


class StatusResponse(BaseModel):
    """Generic status response schema."""

    status: Literal["ok"] = "ok"
    message: str | None = None
