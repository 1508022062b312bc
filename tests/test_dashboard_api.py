"""Tests for the dashboard API."""

from datetime import date, datetime, timedelta, timezone

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from attendance_api.models.orm.admin_user import AdminUserORM
from attendance_api.models.orm.attendance import AttendanceORM
from attendance_api.models.orm.employee import EmployeeORM
from attendance_api.models.orm.holiday import HolidayORM
from attendance_api.models.orm.leave import LeaveORM
from attendance_api.security.password import get_password_service
from attendance_api.utils.dates import local_today


def add_employee(db: Session, platform_id: str, username: str, is_active: bool = True) -> EmployeeORM:
    employee = EmployeeORM(
        platform_id=platform_id,
        platform="discord",
        username=username,
        display_name=username.title(),
        is_active=is_active,
    )
    db.add(employee)
    db.commit()
    return employee


def stamp(day: date, hour: int) -> datetime:
    return datetime(day.year, day.month, day.day, hour, tzinfo=timezone.utc)


class TestAuthAPI:
    """Admin login."""

    def test_login_returns_bearer_token(self, client: TestClient, db: Session) -> None:
        password_hash = get_password_service().hash_password("Sup3r$ecretPass")
        db.add(AdminUserORM(username="admin", password_hash=password_hash, is_active=True))
        db.commit()

        response = client.post("/api/auth/login", json={"username": "Admin", "password": "Sup3r$ecretPass"})

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["username"] == "admin"

        token = body["access_token"]
        assert client.get("/api/employees", headers={"Authorization": f"Bearer {token}"}).status_code == 200

    def test_wrong_password(self, client: TestClient, db: Session) -> None:
        password_hash = get_password_service().hash_password("Sup3r$ecretPass")
        db.add(AdminUserORM(username="admin", password_hash=password_hash, is_active=True))
        db.commit()

        response = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_invalid_token_rejected(self, client: TestClient) -> None:
        response = client.get("/api/employees", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_health_is_public(self, client: TestClient) -> None:
        assert client.get("/api/health").json() == {"status": "healthy"}


class TestEmployeesAPI:
    """Employee listing and detail."""

    def test_list_active_employees_with_totals(
        self, client: TestClient, db: Session, auth_headers: dict[str, str]
    ) -> None:
        today = local_today()
        asha = add_employee(db, "D1", "asha")
        add_employee(db, "D2", "ravi")
        add_employee(db, "D3", "gone", is_active=False)
        db.add_all(
            [
                AttendanceORM(employee_id=asha.id, date=today - timedelta(days=1), check_in_time=stamp(today, 3)),
                AttendanceORM(employee_id=asha.id, date=today, check_in_time=stamp(today, 4)),
            ]
        )
        db.commit()

        response = client.get("/api/employees", headers=auth_headers)

        assert response.status_code == 200
        by_name = {e["username"]: e for e in response.json()}
        assert set(by_name) == {"asha", "ravi"}
        assert by_name["asha"]["total_attendance"] == 2
        assert by_name["asha"]["last_checkin"] is not None
        assert by_name["ravi"]["total_attendance"] == 0

    def test_employee_detail(self, client: TestClient, db: Session, auth_headers: dict[str, str]) -> None:
        today = local_today()
        asha = add_employee(db, "D1", "asha")
        db.add(
            AttendanceORM(
                employee_id=asha.id,
                date=today,
                check_in_time=stamp(today, 3),
                check_out_time=stamp(today, 11),
                overall_rating=4,
            )
        )
        db.commit()

        response = client.get(f"/api/employees/{asha.id}", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["employee"]["username"] == "asha"
        assert len(body["attendance_history"]) == 1
        assert body["stats"]["total_days"] == 1
        assert body["stats"]["avg_hours"] == 8.0
        assert body["leave_balance"]["allowance"] == 14

    def test_unknown_employee(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.get("/api/employees/00000000-0000-0000-0000-000000000000", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Employee not found"


class TestMatrixAPI:
    """Contribution matrix."""

    def test_matrix_levels(self, client: TestClient, db: Session, auth_headers: dict[str, str]) -> None:
        asha = add_employee(db, "D1", "asha")
        db.add_all(
            [
                AttendanceORM(
                    employee_id=asha.id,
                    date=date(2023, 3, 1),
                    check_in_time=stamp(date(2023, 3, 1), 3),
                    check_out_time=stamp(date(2023, 3, 1), 11),
                    overall_rating=5,
                ),
                AttendanceORM(employee_id=asha.id, date=date(2023, 3, 6), check_in_time=stamp(date(2023, 3, 6), 3)),
                LeaveORM(employee_id=asha.id, date=date(2023, 3, 3), description="Trip"),
                HolidayORM(date=date(2023, 3, 7), name="Holi"),
            ]
        )
        db.commit()

        response = client.get("/api/attendance/matrix?year=2023", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["year"] == 2023
        assert [h["date"] for h in body["holidays"]] == ["2023-03-07"]
        days = body["employees"][0]["days"]
        assert len(days) == 365
        assert days["2023-03-01"] == "excellent"
        assert days["2023-03-02"] == "absent"
        assert days["2023-03-03"] == "on_leave"
        assert days["2023-03-04"] == "non_working"
        assert days["2023-03-06"] == "partial"
        assert days["2023-03-07"] == "non_working"

    def test_matrix_filters_by_employee(self, client: TestClient, db: Session, auth_headers: dict[str, str]) -> None:
        asha = add_employee(db, "D1", "asha")
        add_employee(db, "D2", "bina")

        everyone = client.get("/api/attendance/matrix?year=2024", headers=auth_headers).json()
        assert sorted(e["username"] for e in everyone["employees"]) == ["asha", "bina"]

        response = client.get(f"/api/attendance/matrix?year=2024&employeeId={asha.id}", headers=auth_headers)

        assert response.status_code == 200
        assert [e["username"] for e in response.json()["employees"]] == ["asha"]

    def test_matrix_unknown_employee(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.get(
            "/api/attendance/matrix?employeeId=00000000-0000-0000-0000-000000000000",
            headers=auth_headers,
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Employee not found"


class TestLeavesAPI:
    """Leave listings and balances."""

    def test_leave_endpoints(self, client: TestClient, db: Session, auth_headers: dict[str, str]) -> None:
        today = local_today()
        asha = add_employee(db, "D1", "asha")
        db.add(LeaveORM(employee_id=asha.id, date=today, description="Rest day"))
        db.commit()

        all_leaves = client.get("/api/leaves", headers=auth_headers).json()
        assert [(leave["username"], leave["description"]) for leave in all_leaves] == [("asha", "Rest day")]

        on_date = client.get(f"/api/leaves/date/{today.isoformat()}", headers=auth_headers).json()
        assert len(on_date) == 1
        assert client.get("/api/leaves/date/2001-01-01", headers=auth_headers).json() == []

        balance = client.get(f"/api/leaves/balance/{asha.id}", headers=auth_headers).json()
        assert balance["taken_leaves"] == 1
        assert balance["remaining"] == 13

        employee_leaves = client.get(f"/api/leaves/{asha.id}", headers=auth_headers).json()
        assert len(employee_leaves["leaves"]) == 1
        assert employee_leaves["leave_balance"]["remaining"] == 13

    def test_balance_of_unknown_employee(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.get("/api/leaves/balance/00000000-0000-0000-0000-000000000000", headers=auth_headers)
        assert response.status_code == 404


class TestAnalyticsAPI:
    """Dashboard overview endpoints."""

    def test_today_views(self, client: TestClient, db: Session, auth_headers: dict[str, str]) -> None:
        today = local_today()
        asha = add_employee(db, "D1", "asha")
        ravi = add_employee(db, "D2", "ravi")
        add_employee(db, "D3", "mina")
        db.add_all(
            [
                AttendanceORM(
                    employee_id=asha.id,
                    date=today,
                    check_in_time=stamp(today, 3),
                    check_out_time=stamp(today, 9),
                    work_from="office",
                    overall_rating=5,
                ),
                LeaveORM(employee_id=ravi.id, date=today, description="Sick"),
            ]
        )
        db.commit()

        records = client.get("/api/analytics/today-records", headers=auth_headers).json()
        assert len(records) == 1
        assert records[0]["username"] == "asha"
        assert records[0]["hours_worked"] == 6.0

        states = {
            s["username"]: s["state"]
            for s in client.get("/api/analytics/checkin-status", headers=auth_headers).json()
        }
        assert states == {"asha": "completed", "ravi": "on_leave", "mina": "no_record"}

        kpis = client.get("/api/analytics/kpis", headers=auth_headers).json()
        assert kpis["active_employees"] == 3
        assert kpis["today"]["checkins"] == 1
        assert kpis["today"]["leaves"] == 1

        summary = client.get("/api/analytics/employee-leave-summary", headers=auth_headers).json()
        remaining = {s["username"]: s["leave_balance"]["remaining"] for s in summary}
        assert remaining == {"asha": 14, "ravi": 13, "mina": 14}

        stats = client.get("/api/analytics/stats", headers=auth_headers).json()
        assert any(s["date"] == today.isoformat() and s["total_checkins"] == 1 for s in stats)


class TestSettingsAPI:
    """Project settings endpoints."""

    def test_get_and_update(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        assert client.get("/api/settings", headers=auth_headers).json()["annual_leave_days"] == 14

        response = client.put(
            "/api/settings",
            json={"annual_leave_days": 21, "annual_leave_reset_date": "01-01", "project_start_date": "2024-01-07"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "project_start_date": "2024-01-07",
            "annual_leave_days": 21,
            "annual_leave_reset_date": "01-01",
        }

    def test_invalid_reset_date(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.put("/api/settings", json={"annual_leave_reset_date": "02-30"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Invalid value for annual_leave_reset_date")

    def test_negative_allowance_rejected(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        response = client.put("/api/settings", json={"annual_leave_days": -1}, headers=auth_headers)
        assert response.status_code == 422
