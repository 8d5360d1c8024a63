"""FastAPI dependencies for authentication and authorization."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from orthosim.core.app_exceptions import raise_not_found
from orthosim.core.security import verify_access_token
from orthosim.db.session import get_db
from orthosim.models.profile import MentorProfile, TraineeProfile
from orthosim.models.user import User, UserType


def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    db: Session = Depends(get_db),
) -> User:
    """Dependency to get the current authenticated user from JWT token."""
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header missing",
        )

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid authorization scheme")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format. Expected: Bearer <token>",
        ) from None

    try:
        payload = verify_access_token(token)
        user_id = UUID(payload["sub"])
        user_type = payload["user_type"]
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid or expired token: {str(e)}",
        ) from e

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    # Token claims must still match the stored account type
    if user.user_type != user_type:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token role mismatch. Please login again.",
        )

    return user


def require_roles(*allowed_types: UserType):
    """Dependency factory to require specific account types."""

    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if UserType(current_user.user_type) not in allowed_types:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {[t.value for t in allowed_types]}",
            )
        return current_user

    return role_checker


def get_current_mentor_profile(
    current_user: User = Depends(require_roles(UserType.MENTOR)),
    db: Session = Depends(get_db),
) -> MentorProfile:
    profile = db.query(MentorProfile).filter(MentorProfile.user_id == current_user.id).first()
    if profile is None:
        raise_not_found("Mentor profile not found", code="MENTOR_PROFILE_NOT_FOUND")
    return profile


def get_current_trainee_profile(
    current_user: User = Depends(require_roles(UserType.TRAINEE)),
    db: Session = Depends(get_db),
) -> TraineeProfile:
    profile = db.query(TraineeProfile).filter(TraineeProfile.user_id == current_user.id).first()
    if profile is None:
        raise_not_found("Trainee profile not found", code="TRAINEE_PROFILE_NOT_FOUND")
    return profile


CurrentUser = Annotated[User, Depends(get_current_user)]
CurrentMentor = Annotated[MentorProfile, Depends(get_current_mentor_profile)]
CurrentTrainee = Annotated[TraineeProfile, Depends(get_current_trainee_profile)]
DbSession = Annotated[Session, Depends(get_db)]
