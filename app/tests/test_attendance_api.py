"""
Tests for attendance endpoints
"""
import inspect
from fastapi import status
from fastapi.routing import APIRoute

from app.api.router import api_router
from app.core.deps import get_current_user, get_store, require_manager
from app.models.attendance import Attendance
from app.tests.conftest import register_and_login
from app.utils.datetime_utils import today_key


def test_checkin_success(client, db):
    """Test check-in creates today's record"""
    employee = register_and_login(client, "emp@example.com")

    response = client.post("/api/v1/attendance/checkin", headers=employee["headers"])

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["user_id"] == employee["user"]["id"]
    assert data["date"] == today_key()
    assert data["status"] in ("present", "late")
    assert data["check_in_time"] is not None
    assert data["check_out_time"] is None
    assert data["total_hours"] == 0


def test_checkin_twice(client, db):
    """Test second check-in on the same day is rejected"""
    employee = register_and_login(client, "emp@example.com")
    client.post("/api/v1/attendance/checkin", headers=employee["headers"])

    response = client.post("/api/v1/attendance/checkin", headers=employee["headers"])

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Already checked in today"
    assert db.query(Attendance).count() == 1


def test_checkin_requires_auth(client, db):
    """Test check-in without a token"""
    response = client.post("/api/v1/attendance/checkin")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_checkout_without_checkin(client, db):
    """Test check-out before check-in"""
    employee = register_and_login(client, "emp@example.com")

    response = client.post("/api/v1/attendance/checkout", headers=employee["headers"])

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Not checked in yet"


def test_checkout_success_short_day_is_half_day(client, db):
    """Test an immediate check-out records zero hours as a half day"""
    employee = register_and_login(client, "emp@example.com")
    client.post("/api/v1/attendance/checkin", headers=employee["headers"])

    response = client.post("/api/v1/attendance/checkout", headers=employee["headers"])

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["check_out_time"] is not None
    assert data["total_hours"] == 0
    assert data["status"] == "half-day"


def test_checkout_twice(client, db):
    """Test second check-out is rejected"""
    employee = register_and_login(client, "emp@example.com")
    client.post("/api/v1/attendance/checkin", headers=employee["headers"])
    client.post("/api/v1/attendance/checkout", headers=employee["headers"])

    response = client.post("/api/v1/attendance/checkout", headers=employee["headers"])

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Already checked out today"


def test_today(client, db):
    """Test today's record is null before check-in and set after"""
    employee = register_and_login(client, "emp@example.com")

    before = client.get("/api/v1/attendance/today", headers=employee["headers"])
    assert before.status_code == status.HTTP_200_OK
    assert before.json() is None

    client.post("/api/v1/attendance/checkin", headers=employee["headers"])
    after = client.get("/api/v1/attendance/today", headers=employee["headers"])
    assert after.json()["date"] == today_key()


def test_my_history_and_summary(client, db):
    """Test own history and the current month summary"""
    employee = register_and_login(client, "emp@example.com")
    client.post("/api/v1/attendance/checkin", headers=employee["headers"])
    client.post("/api/v1/attendance/checkout", headers=employee["headers"])

    history = client.get("/api/v1/attendance/my-history", headers=employee["headers"])
    assert history.status_code == status.HTTP_200_OK
    assert [a["date"] for a in history.json()] == [today_key()]

    summary = client.get("/api/v1/attendance/my-summary", headers=employee["headers"])
    assert summary.status_code == status.HTTP_200_OK
    assert summary.json() == {
        "total_present": 0,
        "total_absent": 0,
        "total_late": 0,
        "total_half_day": 1,
        "total_hours": 0,
    }


def test_history_only_shows_own_records(client, db):
    """Test one employee never sees another's records"""
    first = register_and_login(client, "one@example.com")
    second = register_and_login(client, "two@example.com")
    client.post("/api/v1/attendance/checkin", headers=first["headers"])

    response = client.get("/api/v1/attendance/my-history", headers=second["headers"])

    assert response.json() == []


def test_manager_endpoints_forbidden_for_employee(client, db):
    """Test every manager-only route returns 403 to an employee"""
    employee = register_and_login(client, "emp@example.com")

    for path in (
        "/api/v1/attendance/all",
        f"/api/v1/attendance/employee/{employee['user']['id']}",
        "/api/v1/attendance/today-status",
        "/api/v1/attendance/summary",
        "/api/v1/attendance/export",
        "/api/v1/users/employees",
        "/api/v1/dashboard/manager",
    ):
        response = client.get(path, headers=employee["headers"])
        assert response.status_code == status.HTTP_403_FORBIDDEN, path


def test_all_and_today_status(client, db):
    """Test managers see every record with its user"""
    employee = register_and_login(client, "emp@example.com", name="Emp One")
    manager = register_and_login(client, "boss@example.com", role="manager", name="Boss")
    client.post("/api/v1/attendance/checkin", headers=employee["headers"])

    everything = client.get("/api/v1/attendance/all", headers=manager["headers"])
    assert everything.status_code == status.HTTP_200_OK
    items = everything.json()
    assert len(items) == 1
    assert items[0]["user"]["name"] == "Emp One"
    assert items[0]["user"]["employee_id"] == employee["user"]["employee_id"]
    assert "password_hash" not in items[0]["user"]

    today = client.get("/api/v1/attendance/today-status", headers=manager["headers"])
    assert today.status_code == status.HTTP_200_OK
    assert [a["user"]["email"] for a in today.json()] == ["emp@example.com"]


def test_employee_attendance(client, db):
    """Test a manager can read one employee's records"""
    employee = register_and_login(client, "emp@example.com")
    manager = register_and_login(client, "boss@example.com", role="manager", name="Boss")
    client.post("/api/v1/attendance/checkin", headers=employee["headers"])

    response = client.get(
        f"/api/v1/attendance/employee/{employee['user']['id']}",
        headers=manager["headers"],
    )

    assert response.status_code == status.HTTP_200_OK
    assert [a["user_id"] for a in response.json()] == [employee["user"]["id"]]


def test_employee_attendance_unknown_user(client, db):
    """Test an unknown user id returns 404"""
    manager = register_and_login(client, "boss@example.com", role="manager", name="Boss")

    response = client.get("/api/v1/attendance/employee/does-not-exist", headers=manager["headers"])

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "User not found"


def test_summary_for_range(client, db):
    """Test the team summary over an explicit range"""
    first = register_and_login(client, "one@example.com")
    second = register_and_login(client, "two@example.com")
    manager = register_and_login(client, "boss@example.com", role="manager", name="Boss")
    for session in (first, second):
        client.post("/api/v1/attendance/checkin", headers=session["headers"])
    client.post("/api/v1/attendance/checkout", headers=second["headers"])
    today = today_key()

    response = client.get(
        "/api/v1/attendance/summary",
        params={"from": today, "to": today},
        headers=manager["headers"],
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total_present"] + data["total_late"] == 1
    assert data["total_half_day"] == 1
    assert data["total_absent"] == 0

    only_first = client.get(
        "/api/v1/attendance/summary",
        params={"from": today, "to": today, "employee_id": first["user"]["id"]},
        headers=manager["headers"],
    ).json()
    assert only_first["total_half_day"] == 0
    assert only_first["total_present"] + only_first["total_late"] == 1


def test_summary_rejects_bad_dates(client, db):
    """Test malformed and reversed ranges are 400"""
    manager = register_and_login(client, "boss@example.com", role="manager", name="Boss")

    malformed = client.get("/api/v1/attendance/summary", params={"from": "yesterday"}, headers=manager["headers"])
    assert malformed.status_code == status.HTTP_400_BAD_REQUEST

    reversed_range = client.get(
        "/api/v1/attendance/summary",
        params={"from": "2024-03-01", "to": "2024-02-01"},
        headers=manager["headers"],
    )
    assert reversed_range.status_code == status.HTTP_400_BAD_REQUEST
    assert reversed_range.json()["detail"] == "from must be on or before to"


def test_list_employees(client, db):
    """Test the roster lists employees but not managers"""
    register_and_login(client, "emp@example.com", name="Emp One")
    manager = register_and_login(client, "boss@example.com", role="manager", name="Boss")

    response = client.get("/api/v1/users/employees", headers=manager["headers"])

    assert response.status_code == status.HTTP_200_OK
    assert [u["email"] for u in response.json()] == ["emp@example.com"]


def test_store_backed_endpoints_run_in_threadpool():
    """Test routes and dependencies that hit the database are plain functions"""
    blocking = [
        route.endpoint.__name__
        for route in api_router.routes
        if isinstance(route, APIRoute)
        and route.path not in ("/health", "/version")
        and inspect.iscoroutinefunction(route.endpoint)
    ]
    assert blocking == []
    for dependency in (get_current_user, get_store, require_manager):
        assert not inspect.iscoroutinefunction(dependency)
