"""Employees router."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from attendance_api.dependencies import get_employee_service
from attendance_api.models.domain.admin_user import AdminUser
from attendance_api.models.dto.employee import EmployeeDetailResponse, EmployeeSummaryResponse
from attendance_api.security.auth import get_current_user
from attendance_api.security.rate_limit import API_DEFAULT_LIMIT, limiter
from attendance_api.services.employee_service import EmployeeService

router = APIRouter()


@router.get("", response_model=list[EmployeeSummaryResponse])
@limiter.limit(API_DEFAULT_LIMIT)
async def list_employees(
    request: Request,
    current_user: AdminUser = Depends(get_current_user),
    employee_service: EmployeeService = Depends(get_employee_service),
) -> list[EmployeeSummaryResponse]:
    """List active employees with their attendance totals."""
    return await employee_service.list_employees()


@router.get("/{employee_id}", response_model=EmployeeDetailResponse)
@limiter.limit(API_DEFAULT_LIMIT)
async def get_employee(
    request: Request,
    employee_id: UUID,
    current_user: AdminUser = Depends(get_current_user),
    employee_service: EmployeeService = Depends(get_employee_service),
) -> EmployeeDetailResponse:
    """Get one employee with recent attendance, 30-day stats and leave balance."""
    return await employee_service.get_employee_detail(employee_id)
