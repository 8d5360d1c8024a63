"""Authentication endpoints."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from orthosim.core.app_exceptions import raise_app_error
from orthosim.core.config import settings
from orthosim.core.dependencies import get_current_user
from orthosim.core.security import create_access_token, hash_password, verify_password
from orthosim.core.security_logging import log_security_event
from orthosim.db.session import get_db
from orthosim.models.profile import MentorProfile, TraineeProfile
from orthosim.models.user import User, UserType
from orthosim.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    MentorRegistrationRequest,
    RegistrationRequest,
    RegistrationResponse,
    TokensResponse,
    UserResponse,
)
from orthosim.services.mentor_codes import find_usable_mentor, new_code_expiry, unique_mentor_code

router = APIRouter(tags=["Auth"])

# Verified against when the email is unknown so both paths cost one argon2 check
_DUMMY_HASH = hash_password("orthosim-timing-dummy")


def _tokens_for_user(user: User) -> TokensResponse:
    access_token = create_access_token(
        str(user.id),
        user.user_type,
        mentor_profile_id=str(user.mentor_profile_id) if user.mentor_profile_id else None,
        trainee_profile_id=str(user.trainee_profile_id) if user.trainee_profile_id else None,
    )
    return TokensResponse(
        access_token=access_token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.post(
    "/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a mentor or trainee account. Trainees must supply a valid mentor code.",
)
async def register(
    request_data: RegistrationRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> RegistrationResponse:
    """Register a mentor (issuing a mentor code) or a trainee (attaching to a mentor)."""
    if db.query(User).filter(User.email == request_data.email).first():
        log_security_event(request, event_type="auth_register", outcome="deny", reason_code="CONFLICT")
        raise_app_error(
            status_code=status.HTTP_409_CONFLICT,
            code="CONFLICT",
            message="Email already registered",
        )

    user = User(
        name=request_data.name,
        email=request_data.email,
        password_hash=hash_password(request_data.password),
        user_type=request_data.user_type,
        is_active=True,
    )

    if isinstance(request_data, MentorRegistrationRequest):
        user.mentor_profile = MentorProfile(
            specialization=request_data.specialization,
            qualification=request_data.qualification,
            mentor_code=unique_mentor_code(db),
            mentor_code_expiry=new_code_expiry(),
            is_code_active=True,
        )
    else:
        mentor = find_usable_mentor(db, request_data.mentor_code)
        if mentor is None:
            log_security_event(
                request,
                event_type="auth_register",
                outcome="deny",
                reason_code="INVALID_MENTOR_CODE",
            )
            raise_app_error(
                status_code=status.HTTP_404_NOT_FOUND,
                code="INVALID_MENTOR_CODE",
                message="Invalid or expired mentor code",
            )
        user.trainee_profile = TraineeProfile(
            mentor_id=mentor.id,
            institution=request_data.institution,
            graduation_year=request_data.graduation_year,
        )

    db.add(user)
    db.commit()
    db.refresh(user)

    log_security_event(
        request,
        event_type="auth_register",
        outcome="allow",
        user_id=str(user.id),
        user_type=user.user_type,
    )

    return RegistrationResponse(
        user=UserResponse.model_validate(user),
        mentor_code=user.mentor_profile.mentor_code if user.mentor_profile else None,
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Log in",
    description="Authenticate with email and password. Returns user data and an access token.",
)
async def login(
    request_data: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> LoginResponse:
    """Log in a user."""
    user = db.query(User).filter(User.email == request_data.email).first()

    password_hash = user.password_hash if user else _DUMMY_HASH
    password_valid = verify_password(request_data.password, password_hash) and user is not None

    # Generic error for invalid credentials (don't reveal if email exists)
    if not password_valid:
        log_security_event(
            request,
            event_type="auth_login_failed",
            outcome="deny",
            reason_code="UNAUTHORIZED",
        )
        raise_app_error(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code="UNAUTHORIZED",
            message="Invalid email or password",
        )

    if not user.is_active:
        log_security_event(
            request,
            event_type="auth_login_failed",
            outcome="deny",
            reason_code="ACCOUNT_INACTIVE",
            user_id=str(user.id),
        )
        raise_app_error(
            status_code=status.HTTP_403_FORBIDDEN,
            code="ACCOUNT_INACTIVE",
            message="User account is inactive",
        )

    log_security_event(request, event_type="auth_login_success", outcome="allow", user_id=str(user.id))

    return LoginResponse(user=UserResponse.model_validate(user), tokens=_tokens_for_user(user))


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Current user",
    description="Get the authenticated user's account.",
)
async def me(current_user: User = Depends(get_current_user)) -> MeResponse:
    return MeResponse(user=UserResponse.model_validate(current_user))
