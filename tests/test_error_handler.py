"""Tests for the global exception handlers."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from attendance_api.exceptions import (
    AttendanceAPIError,
    EmployeeNotFoundError,
    InvalidSettingError,
    OnLeaveError,
)
from attendance_api.middleware.error_handler import (
    attendance_api_error_handler,
    generic_exception_handler,
    http_exception_handler,
    sqlalchemy_exception_handler,
    summarize_validation_errors,
)


def build_app(error: Exception) -> FastAPI:
    app = FastAPI()
    app.add_exception_handler(AttendanceAPIError, attendance_api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    @app.get("/boom")
    async def boom() -> None:
        raise error

    return app


class TestDomainErrors:
    """Domain errors keep their message and map to their branch status."""

    @pytest.mark.parametrize(
        "error,status_code",
        [
            (EmployeeNotFoundError(), 404),
            (OnLeaveError("check out"), 409),
            (InvalidSettingError("annual_leave_days", "must be a whole number"), 400),
        ],
    )
    def test_status_and_message(self, error: AttendanceAPIError, status_code: int) -> None:
        response = TestClient(build_app(error)).get("/boom")

        assert response.status_code == status_code
        assert response.json() == {"detail": error.message}


class TestInternalErrors:
    """Internal failures never leak their text."""

    def test_integrity_error_is_conflict(self) -> None:
        error = IntegrityError("INSERT INTO holidays ...", {}, Exception("duplicate key"))
        response = TestClient(build_app(error)).get("/boom")

        assert response.status_code == 409
        assert "INSERT" not in response.text

    def test_database_error_is_generic(self) -> None:
        error = OperationalError("SELECT secret FROM admin_users", {}, Exception("connection refused"))
        response = TestClient(build_app(error)).get("/boom")

        assert response.status_code == 500
        assert response.json() == {"detail": "Database error occurred"}

    def test_unexpected_error_is_generic(self) -> None:
        client = TestClient(build_app(RuntimeError("password=hunter2")), raise_server_exceptions=False)
        response = client.get("/boom")

        assert response.status_code == 500
        assert "hunter2" not in response.text

    def test_http_exception_detail_passes_through(self) -> None:
        error = StarletteHTTPException(status_code=401, detail="Invalid request signature")
        response = TestClient(build_app(error)).get("/boom")

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid request signature"}

    def test_non_string_detail_is_replaced(self) -> None:
        error = StarletteHTTPException(status_code=404, detail={"table": "employees"})  # type: ignore[arg-type]
        response = TestClient(build_app(error)).get("/boom")

        assert response.json() == {"detail": "Resource not found"}


class TestSummarizeValidationErrors:
    """Validation error summaries."""

    def test_lists_fields(self) -> None:
        errors = [
            {"loc": ("body", "name"), "msg": "String should have at least 1 character"},
            {"loc": ("query", "year"), "msg": "Input should be greater than or equal to 2000"},
        ]
        assert summarize_validation_errors(errors) == (
            "name: String should have at least 1 character; "
            "year: Input should be greater than or equal to 2000"
        )

    def test_caps_at_three(self) -> None:
        errors = [{"loc": ("body", f"f{i}"), "msg": "bad"} for i in range(5)]
        assert summarize_validation_errors(errors).count(";") == 2

    def test_private_fields_hidden(self) -> None:
        assert summarize_validation_errors([{"loc": ("body", "_secret"), "msg": "bad"}]) == "Invalid input data"
