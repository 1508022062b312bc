"""Holidays router."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from attendance_api.dependencies import get_holiday_service
from attendance_api.models.domain.admin_user import AdminUser
from attendance_api.models.dto.holiday import HolidayCreate, HolidayResponse
from attendance_api.security.auth import get_current_user
from attendance_api.security.rate_limit import API_DEFAULT_LIMIT, limiter
from attendance_api.services.holiday_service import HolidayService

router = APIRouter()


@router.get("", response_model=list[HolidayResponse])
@limiter.limit(API_DEFAULT_LIMIT)
async def list_holidays(
    request: Request,
    current_user: AdminUser = Depends(get_current_user),
    holiday_service: HolidayService = Depends(get_holiday_service),
) -> list[HolidayResponse]:
    """List all holidays, newest first."""
    return await holiday_service.list_holidays()


@router.post("", response_model=HolidayResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(API_DEFAULT_LIMIT)
async def create_holiday(
    request: Request,
    body: HolidayCreate,
    current_user: AdminUser = Depends(get_current_user),
    holiday_service: HolidayService = Depends(get_holiday_service),
) -> HolidayResponse:
    """Create a holiday. At most one holiday per date."""
    return await holiday_service.create_holiday(body)


@router.delete("/{holiday_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(API_DEFAULT_LIMIT)
async def delete_holiday(
    request: Request,
    holiday_id: UUID,
    current_user: AdminUser = Depends(get_current_user),
    holiday_service: HolidayService = Depends(get_holiday_service),
) -> Response:
    """Delete a holiday."""
    await holiday_service.delete_holiday(holiday_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
