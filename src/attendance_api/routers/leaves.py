"""Leaves router."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from attendance_api.dependencies import get_leave_service
from attendance_api.models.domain.admin_user import AdminUser
from attendance_api.models.dto.leave import (
    EmployeeLeavesResponse,
    LeaveBalanceResponse,
    LeaveWithEmployeeResponse,
)
from attendance_api.security.auth import get_current_user
from attendance_api.security.rate_limit import API_DEFAULT_LIMIT, limiter
from attendance_api.services.leave_service import LeaveService

router = APIRouter()


@router.get("", response_model=list[LeaveWithEmployeeResponse])
@limiter.limit(API_DEFAULT_LIMIT)
async def list_leaves(
    request: Request,
    current_user: AdminUser = Depends(get_current_user),
    leave_service: LeaveService = Depends(get_leave_service),
) -> list[LeaveWithEmployeeResponse]:
    """List all leaves with employee names, newest first."""
    return await leave_service.list_leaves()


@router.get("/date/{day}", response_model=list[LeaveWithEmployeeResponse])
@limiter.limit(API_DEFAULT_LIMIT)
async def list_leaves_on(
    request: Request,
    day: date,
    current_user: AdminUser = Depends(get_current_user),
    leave_service: LeaveService = Depends(get_leave_service),
) -> list[LeaveWithEmployeeResponse]:
    """List leaves taken on one date."""
    return await leave_service.list_leaves_on(day)


@router.get("/balance/{employee_id}", response_model=LeaveBalanceResponse)
@limiter.limit(API_DEFAULT_LIMIT)
async def get_leave_balance(
    request: Request,
    employee_id: UUID,
    current_user: AdminUser = Depends(get_current_user),
    leave_service: LeaveService = Depends(get_leave_service),
) -> LeaveBalanceResponse:
    """Get an employee's leave balance for the current leave year."""
    return await leave_service.get_balance(employee_id)


@router.get("/{employee_id}", response_model=EmployeeLeavesResponse)
@limiter.limit(API_DEFAULT_LIMIT)
async def get_employee_leaves(
    request: Request,
    employee_id: UUID,
    current_user: AdminUser = Depends(get_current_user),
    leave_service: LeaveService = Depends(get_leave_service),
) -> EmployeeLeavesResponse:
    """Get an employee's leaves plus leave balance."""
    return await leave_service.get_employee_leaves(employee_id)
