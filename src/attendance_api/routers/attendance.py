"""Attendance matrix router."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from attendance_api.dependencies import get_analytics_service
from attendance_api.models.domain.admin_user import AdminUser
from attendance_api.models.dto.attendance import MatrixResponse
from attendance_api.security.auth import get_current_user
from attendance_api.security.rate_limit import API_DEFAULT_LIMIT, limiter
from attendance_api.services.analytics_service import AnalyticsService
from attendance_api.utils.dates import local_today

router = APIRouter()


@router.get("/matrix", response_model=MatrixResponse)
@limiter.limit(API_DEFAULT_LIMIT)
async def get_matrix(
    request: Request,
    year: int | None = Query(default=None, ge=2000, le=2100),
    employee_id: UUID | None = Query(default=None, alias="employeeId"),
    current_user: AdminUser = Depends(get_current_user),
    analytics_service: AnalyticsService = Depends(get_analytics_service),
) -> MatrixResponse:
    """Get the contribution level of every employee for every day of a year.

    Defaults to the current year. Pass ``employeeId`` to restrict the matrix
    to one employee; an unknown id answers 404.
    """
    return await analytics_service.get_matrix(year or local_today().year, employee_id)
