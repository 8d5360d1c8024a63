"""Tests for mentor profile, code, trainee list, rankings and dashboard."""

from orthosim.models.leaderboard import LeaderboardEntry
from orthosim.models.profile import MentorProfile
from orthosim.performance import UpstreamFetchError
from orthosim.performance.service import SqlLeaderboardRepository
from tests.helpers.seed import add_attempt, create_test_mentor, create_test_trainee


def test_get_and_update_profile(client, mentor, mentor_headers):
    response = client.get("/v1/mentor/profile", headers=mentor_headers)
    assert response.status_code == 200
    assert response.json()["mentor_code"] == mentor.mentor_code

    response = client.put(
        "/v1/mentor/profile",
        headers=mentor_headers,
        json={"name": "Dr. Renamed", "department": "Orthopedics"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Dr. Renamed"
    assert data["department"] == "Orthopedics"
    assert data["specialization"] == "Orthopedic Trauma"


def test_update_profile_rejects_null_name(client, db, mentor, mentor_headers):
    response = client.put("/v1/mentor/profile", headers=mentor_headers, json={"name": None})
    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"

    response = client.put("/v1/mentor/profile", headers=mentor_headers, json={"email": None})
    assert response.status_code == 422

    db.expire_all()
    assert mentor.user.name == "Dr. Mentor"


def test_update_profile_email_conflict(client, db, mentor_headers):
    other = create_test_mentor(db, email="taken@orthosim.io")
    response = client.put(
        "/v1/mentor/profile", headers=mentor_headers, json={"email": other.user.email}
    )
    assert response.status_code == 409


def test_rotate_code(client, db, mentor, mentor_headers):
    old_code = mentor.mentor_code
    assert client.get("/v1/mentor/code", headers=mentor_headers).json()["mentor_code"] == old_code

    response = client.post("/v1/mentor/code", headers=mentor_headers)
    assert response.status_code == 200
    new_code = response.json()["mentor_code"]
    assert new_code != old_code
    assert response.json()["is_code_active"] is True

    db.expire_all()
    assert db.get(MentorProfile, mentor.id).mentor_code == new_code


def test_trainee_list(client, db, mentor, trainee, mentor_headers):
    idle = create_test_trainee(db, mentor, name="Idle Ian")
    add_attempt(db, trainee, "80%", days_ago=1)
    add_attempt(db, trainee, "90%", days_ago=20)
    add_attempt(db, trainee, "junk", days_ago=2)

    response = client.get("/v1/mentor/trainees", headers=mentor_headers)
    assert response.status_code == 200
    rows = {r["id"]: r for r in response.json()}

    active = rows[str(trainee.id)]
    assert active["total_attempts"] == 3
    assert active["average_score"] == "85.0%"
    assert active["last_activity"] == "1 day ago"
    assert active["status"] == "active"

    # Falls back to account creation, which is today
    assert rows[str(idle.id)]["total_attempts"] == 0
    assert rows[str(idle.id)]["average_score"] == "0.0%"
    assert rows[str(idle.id)]["last_activity"] == "Today"


def test_trainee_list_inactive_after_window(client, db, mentor, trainee, mentor_headers):
    add_attempt(db, trainee, "70%", days_ago=30)
    row = client.get("/v1/mentor/trainees", headers=mentor_headers).json()[0]
    assert row["status"] == "inactive"
    assert row["last_activity"] == "30 days ago"


def test_rankings_persist_leaderboard(client, db, mentor, mentor_headers):
    a = create_test_trainee(db, mentor, name="A")
    b = create_test_trainee(db, mentor, name="B")
    create_test_trainee(db, mentor, name="No attempts")
    add_attempt(db, a, "90%", total_time=600)
    add_attempt(db, b, "75%", total_time=300)

    response = client.get("/v1/mentor/rankings", headers=mentor_headers)
    assert response.status_code == 200
    data = response.json()
    assert [(r["rank"], r["trainee"]["name"]) for r in data] == [(1, "A"), (2, "B")]
    assert data[0]["best_score"] == "90%"
    assert data[0]["average_score"] == "90.0%"
    assert data[0]["improvement_rate_available"] is False
    assert data[0]["is_current_user"] is None

    rows = {r.trainee_profile_id: r.rank for r in db.query(LeaderboardEntry).all()}
    assert rows == {a.id: 1, b.id: 2}


def test_rankings_unavailable_when_fetch_fails(client, mentor_headers, monkeypatch):
    def broken_fetch(self, mentor_profile_id):
        raise UpstreamFetchError("db down")

    monkeypatch.setattr(SqlLeaderboardRepository, "fetch_cohort", broken_fetch)
    response = client.get("/v1/mentor/rankings", headers=mentor_headers)
    assert response.status_code == 503
    assert response.json()["error_code"] == "RANKING_UNAVAILABLE"


def test_dashboard_stats(client, db, mentor, trainee, mentor_headers):
    create_test_trainee(db, mentor)
    add_attempt(db, trainee, "80%", total_time=3600)
    add_attempt(db, trainee, "abc", total_time=1800)
    add_attempt(db, trainee, "60%", total_time=1800, is_completed=False)

    response = client.get("/v1/mentor/dashboard/stats", headers=mentor_headers)
    assert response.status_code == 200
    assert response.json() == {
        "total_trainees": 2,
        "active_trainees": 1,
        "total_attempts": 3,
        "average_score": 80.0,
        "total_training_hours": 2,
        "feedback_given": 0,
    }


def test_recent_attempts_newest_first(client, db, trainee, mentor_headers):
    for days_ago, score in [(3, "50%"), (1, "70%"), (2, "60%")]:
        add_attempt(db, trainee, score, days_ago=days_ago)

    response = client.get("/v1/mentor/dashboard/recent-attempts?limit=2", headers=mentor_headers)
    assert response.status_code == 200
    data = response.json()
    assert [r["score"] for r in data] == ["70%", "60%"]
    assert data[0]["trainee_name"] == "Tara Trainee"
    assert data[0]["feedback_count"] == 0


def test_top_trainees_does_not_persist(client, db, mentor, mentor_headers):
    for name, score in [("Low", "55%"), ("High", "98%"), ("Mid", "77%")]:
        add_attempt(db, create_test_trainee(db, mentor, name=name), score)

    response = client.get("/v1/mentor/dashboard/top-trainees?limit=2", headers=mentor_headers)
    assert response.status_code == 200
    assert [(r["rank"], r["name"]) for r in response.json()] == [(1, "High"), (2, "Mid")]
    assert db.query(LeaderboardEntry).count() == 0


def test_other_mentors_trainees_are_invisible(client, db, mentor_headers):
    stranger = create_test_mentor(db)
    add_attempt(db, create_test_trainee(db, stranger), "99%")
    assert client.get("/v1/mentor/rankings", headers=mentor_headers).json() == []
    assert client.get("/v1/mentor/trainees", headers=mentor_headers).json() == []
