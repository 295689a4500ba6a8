"""End-to-end tests through the HTTP routes."""
from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from workhours.core.config import Settings
from workhours.exceptions import StorageUnavailableError
from workhours.main import create_app

NOW = datetime(2024, 5, 15, 12, 0)


def _settings(monkeypatch, tmp_path, **env: str) -> Settings:
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'hours.db'}")
    monkeypatch.setenv("JWT_SECRET_KEY", "route-tests")
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    return Settings.from_env()


@pytest.fixture()
def client(monkeypatch, tmp_path):
    app = create_app(_settings(monkeypatch, tmp_path), clock=lambda: NOW)
    with TestClient(app) as test_client:
        yield test_client


def _login(client: TestClient, username: str = "alice", email: str = "a@x.com") -> None:
    client.post(
        "/register",
        data={"username": username, "email": email, "password": "pw1"},
        follow_redirects=False,
    )
    response = client.post(
        "/login", data={"email": email, "password": "pw1"}, follow_redirects=False
    )
    assert response.status_code == 303


def test_anonymous_requests_are_redirected_to_login(client: TestClient) -> None:
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_register_login_and_home(client: TestClient) -> None:
    response = client.post(
        "/register",
        data={"username": "alice", "email": "a@x.com", "password": "pw1"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/login"

    response = client.post(
        "/login", data={"email": "a@x.com", "password": "pw1"}, follow_redirects=False
    )
    assert response.status_code == 303
    assert "access_token" in response.cookies

    home = client.get("/").json()
    assert home == {"username": "alice", "jobs": [], "daily_jobs": []}


def test_wrong_password_keeps_user_on_login_form(client: TestClient) -> None:
    client.post("/register", data={"username": "alice", "email": "a@x.com", "password": "pw1"})

    response = client.post(
        "/login", data={"email": "a@x.com", "password": "wrong"}, follow_redirects=False
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password!", "form": "login"}


def test_duplicate_registration_is_reported(client: TestClient) -> None:
    client.post("/register", data={"username": "alice", "email": "a@x.com", "password": "pw1"})

    response = client.post(
        "/register", data={"username": "bob", "email": "a@x.com", "password": "pw2"}
    )

    assert response.status_code == 409
    assert response.json() == {"error": "Email already registered!", "form": "register"}


def test_missing_registration_field_is_a_validation_error(client: TestClient) -> None:
    response = client.post("/register", data={"username": "alice", "email": "a@x.com"})

    assert response.status_code == 400
    assert response.json()["error"] == "All fields are required!"


def test_login_form_redirects_when_already_authenticated(client: TestClient) -> None:
    assert client.get("/login").json() == {"form": "login", "error": None}
    _login(client)

    response = client.get("/login", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/"


def test_add_job_and_entry_then_report(client: TestClient) -> None:
    _login(client)

    response = client.post(
        "/add-job",
        data={"jobName": " Tutoring ", "date": "2024-05-01", "salaryType": "hourly", "salaryAmount": "10"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    response = client.post(
        "/add-daily-job",
        data={"jobName": "Tutoring", "date": "2024-05-01", "startTime": "22:00", "endTime": "06:00"},
        follow_redirects=False,
    )
    assert response.status_code == 303

    home = client.get("/").json()
    assert [job["job_name"] for job in home["jobs"]] == ["Tutoring"]
    assert home["daily_jobs"][0]["total_hours"] == "8.00"
    assert home["daily_jobs"][0]["start_time"] == "22:00"

    report = client.get("/report").json()
    assert report["entries"][0]["calculated_salary"] == "80.00"
    assert report["monthly_hours_by_job"] == {"Tutoring": {"2024-05": 8.0}}
    assert report["current_month_day_count_by_job"] == {"Tutoring": 1}
    assert report["total_salary"] == "80.00"
    assert report["charts"]["current_month_days"]["labels"] == ["Tutoring"]


def test_duplicate_job_error_preserves_job_list(client: TestClient) -> None:
    _login(client)
    form = {"jobName": "Cafe", "date": "2024-05-01", "salaryType": "hourly", "salaryAmount": "12"}
    client.post("/add-job", data=form)

    response = client.post("/add-job", data=form)

    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "A job with this name already exists"
    assert [job["job_name"] for job in body["jobs"]] == ["Cafe"]


def test_duplicate_entry_is_rejected(client: TestClient) -> None:
    _login(client)
    form = {"jobName": "Cafe", "date": "2024-05-01", "startTime": "09:00", "endTime": "12:00"}
    client.post("/add-daily-job", data=form)

    response = client.post("/add-daily-job", data={**form, "endTime": "18:00"})

    assert response.status_code == 409
    [entry] = client.get("/daily-entries").json()
    assert entry["total_hours"] == "3.00"


def test_edit_and_delete_routes(client: TestClient) -> None:
    _login(client)
    client.post(
        "/add-job",
        data={"jobName": "Cafe", "date": "2024-05-01", "salaryType": "hourly", "salaryAmount": "12"},
    )
    client.post(
        "/add-daily-job",
        data={"jobName": "Cafe", "date": "2024-05-01", "startTime": "09:00", "endTime": "10:00"},
    )
    job_id = client.get("/jobs").json()[0]["id"]
    entry_id = client.get("/daily-entries").json()[0]["id"]

    job = client.post(
        f"/jobs/{job_id}/edit",
        data={"jobName": "Cafe", "date": "2024-05-01", "salaryType": "hourly", "salaryAmount": "14.5"},
    ).json()
    assert job["salary_amount"] == "14.50"

    entry = client.post(
        f"/daily-entries/{entry_id}/edit",
        data={"jobName": "Cafe", "date": "2024-05-01", "startTime": "09:00", "endTime": "17:30"},
    ).json()
    assert entry["total_hours"] == "8.50"

    response = client.post(f"/daily-entries/{entry_id}/delete", follow_redirects=False)
    assert response.status_code == 303
    response = client.post(f"/jobs/{job_id}/delete", follow_redirects=False)
    assert response.status_code == 303
    assert client.get("/").json()["jobs"] == []

    response = client.post(f"/jobs/{job_id}/delete")
    assert response.status_code == 404


def test_users_cannot_touch_each_others_jobs(client: TestClient) -> None:
    _login(client)
    client.post(
        "/add-job",
        data={"jobName": "Cafe", "date": "2024-05-01", "salaryType": "hourly", "salaryAmount": "12"},
    )
    job_id = client.get("/jobs").json()[0]["id"]
    client.get("/logout")

    _login(client, "bob", "b@x.com")
    response = client.post(f"/jobs/{job_id}/delete")
    assert response.status_code == 404
    assert response.json()["jobs"] == []
    client.get("/logout")

    client.post("/login", data={"email": "a@x.com", "password": "pw1"})
    assert [job["job_name"] for job in client.get("/jobs").json()] == ["Cafe"]


def test_logout_clears_session(client: TestClient) -> None:
    _login(client)

    response = client.get("/logout", follow_redirects=False)

    assert response.status_code == 303
    assert client.get("/", follow_redirects=False).status_code == 303


def test_tampered_cookie_is_treated_as_anonymous(client: TestClient) -> None:
    client.cookies.set("access_token", "not-a-token")

    response = client.get("/report", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_today_only_policy_is_configurable(monkeypatch, tmp_path) -> None:
    app = create_app(
        _settings(monkeypatch, tmp_path, RESTRICT_TO_TODAY="1"), clock=lambda: NOW
    )
    with TestClient(app) as client:
        _login(client)
        response = client.post(
            "/add-daily-job",
            data={"jobName": "Cafe", "date": "2024-05-14", "startTime": "09:00", "endTime": "10:00"},
        )

    assert response.status_code == 400
    assert response.json()["error"] == "Only today's date may be entered"


def test_unreachable_store_aborts_startup(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'no' / 'such' / 'hours.db'}")
    app = create_app(Settings.from_env())

    with pytest.raises(StorageUnavailableError):
        with TestClient(app):
            pass


def test_oversized_salary_amount_is_a_validation_error(client: TestClient) -> None:
    _login(client)
    form = {"jobName": "Cafe", "date": "2024-05-01", "salaryType": "hourly", "salaryAmount": "1e30"}

    response = client.post("/add-job", data=form)

    assert response.status_code == 400
    assert response.json()["jobs"] == []


def test_entry_times_keep_their_seconds(client: TestClient) -> None:
    _login(client)
    form = {"jobName": "Cafe", "date": "2024-05-01", "startTime": "09:00:30", "endTime": "17:00"}
    client.post("/add-daily-job", data=form)

    [entry] = client.get("/daily-entries").json()

    assert entry["start_time"] == "09:00:30"
    assert entry["end_time"] == "17:00"
    assert entry["total_hours"] == "7.99"
