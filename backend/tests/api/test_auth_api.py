"""Tests for registration, login and the auth guard."""

from datetime import datetime, timedelta, timezone

import jwt

from orthosim.core.config import settings
from orthosim.models.profile import MentorProfile, TraineeProfile
from tests.helpers.seed import MENTOR_PASSWORD, auth_headers, create_test_mentor

MENTOR_BODY = {
    "user_type": "MENTOR",
    "name": "Dr. Okafor",
    "email": "Okafor@OrthoSim.io",
    "password": "Secure#Pass1",
    "specialization": "Trauma",
    "qualification": "FRCS",
}


def _trainee_body(code: str, **overrides) -> dict:
    body = {
        "user_type": "TRAINEE",
        "name": "Sam Resident",
        "email": "sam@orthosim.io",
        "password": "Resident#2025",
        "institution": "St. Mary's",
        "graduation_year": 2026,
        "mentor_code": code,
    }
    body.update(overrides)
    return body


def test_register_mentor_issues_code(client, db):
    response = client.post("/v1/auth/register", json=MENTOR_BODY)
    assert response.status_code == 201
    data = response.json()
    assert data["user"]["email"] == "okafor@orthosim.io"
    assert data["user"]["user_type"] == "MENTOR"
    assert data["mentor_code"].startswith("MENTOR_")

    profile = db.query(MentorProfile).filter(MentorProfile.mentor_code == data["mentor_code"]).one()
    assert profile.is_code_active is True
    expiry = profile.mentor_code_expiry.replace(tzinfo=timezone.utc)
    assert expiry > datetime.now(timezone.utc) + timedelta(days=360)


def test_register_trainee_with_mentor_code(client, db, mentor):
    response = client.post("/v1/auth/register", json=_trainee_body(mentor.mentor_code))
    assert response.status_code == 201
    data = response.json()
    assert data["mentor_code"] is None
    assert data["user"]["trainee_profile_id"] is not None

    profile = db.query(TraineeProfile).one()
    assert profile.mentor_id == mentor.id
    assert profile.graduation_year == 2026


def test_register_trainee_unknown_code(client):
    response = client.post("/v1/auth/register", json=_trainee_body("MENTOR_NOPE"))
    assert response.status_code == 404
    assert response.json()["error_code"] == "INVALID_MENTOR_CODE"


def test_register_trainee_inactive_or_expired_code(client, db):
    inactive = create_test_mentor(db, mentor_code="MENTOR_OFF", is_code_active=False)
    expired = create_test_mentor(
        db,
        mentor_code="MENTOR_OLD",
        code_expiry=datetime.now(timezone.utc) - timedelta(days=1),
    )
    for mentor in (inactive, expired):
        response = client.post("/v1/auth/register", json=_trainee_body(mentor.mentor_code))
        assert response.status_code == 404
        assert response.json()["error_code"] == "INVALID_MENTOR_CODE"


def test_register_duplicate_email(client, mentor):
    body = dict(MENTOR_BODY, email=mentor.user.email)
    response = client.post("/v1/auth/register", json=body)
    assert response.status_code == 409
    assert response.json()["error_code"] == "CONFLICT"


def test_register_weak_password(client):
    response = client.post("/v1/auth/register", json=dict(MENTOR_BODY, password="password"))
    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_register_graduation_year_out_of_range(client, mentor):
    response = client.post(
        "/v1/auth/register", json=_trainee_body(mentor.mentor_code, graduation_year=1900)
    )
    assert response.status_code == 422


def test_register_unknown_user_type(client):
    response = client.post("/v1/auth/register", json=dict(MENTOR_BODY, user_type="ADMIN"))
    assert response.status_code == 422


def test_login_returns_token_with_profile_claims(client, mentor):
    response = client.post(
        "/v1/auth/login", json={"email": mentor.user.email, "password": MENTOR_PASSWORD}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["user"]["mentor_profile_id"] == str(mentor.id)
    assert data["tokens"]["token_type"] == "bearer"

    claims = jwt.decode(
        data["tokens"]["access_token"], settings.JWT_SECRET, algorithms=[settings.JWT_ALG]
    )
    assert claims["sub"] == str(mentor.user.id)
    assert claims["user_type"] == "MENTOR"
    assert claims["mentor_profile_id"] == str(mentor.id)
    assert claims["trainee_profile_id"] is None


def test_login_wrong_password_and_unknown_email_look_the_same(client, mentor):
    wrong = client.post("/v1/auth/login", json={"email": mentor.user.email, "password": "Nope#1234"})
    unknown = client.post(
        "/v1/auth/login", json={"email": "ghost@orthosim.io", "password": "Nope#1234"}
    )
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json()["error_code"] == unknown.json()["error_code"] == "UNAUTHORIZED"
    assert wrong.json()["message"] == unknown.json()["message"]


def test_me(client, trainee, trainee_headers):
    response = client.get("/v1/auth/me", headers=trainee_headers)
    assert response.status_code == 200
    assert response.json()["user"]["trainee_profile_id"] == str(trainee.id)


def test_missing_or_bad_token(client):
    assert client.get("/v1/auth/me").status_code == 401
    assert client.get("/v1/auth/me", headers={"Authorization": "Token abc"}).status_code == 401
    assert client.get("/v1/auth/me", headers={"Authorization": "Bearer abc"}).status_code == 401


def test_stale_role_claim_rejected(client, db, trainee):
    headers = auth_headers(trainee.user)
    trainee.user.user_type = "MENTOR"
    db.commit()
    assert client.get("/v1/auth/me", headers=headers).status_code == 401


def test_inactive_user_forbidden(client, db, trainee, trainee_headers):
    trainee.user.is_active = False
    db.commit()
    assert client.get("/v1/auth/me", headers=trainee_headers).status_code == 403


def test_role_guard(client, mentor_headers, trainee_headers):
    assert client.get("/v1/mentor/rankings", headers=trainee_headers).status_code == 403
    assert client.get("/v1/trainee/rankings", headers=mentor_headers).status_code == 403
