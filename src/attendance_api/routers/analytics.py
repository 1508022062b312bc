"""Analytics router for the dashboard overview."""

from fastapi import APIRouter, Depends, Request

from attendance_api.dependencies import get_analytics_service
from attendance_api.models.domain.admin_user import AdminUser
from attendance_api.models.dto.analytics import (
    CheckinStatus,
    DailyStats,
    EmployeeLeaveSummary,
    KpiResponse,
    TodayRecord,
)
from attendance_api.security.auth import get_current_user
from attendance_api.security.rate_limit import API_DEFAULT_LIMIT, limiter
from attendance_api.services.analytics_service import AnalyticsService

router = APIRouter()


@router.get("/stats", response_model=list[DailyStats])
@limiter.limit(API_DEFAULT_LIMIT)
async def get_daily_stats(
    request: Request,
    current_user: AdminUser = Depends(get_current_user),
    analytics_service: AnalyticsService = Depends(get_analytics_service),
) -> list[DailyStats]:
    """Check-ins, check-outs and average rating per day for the last 30 days."""
    return await analytics_service.get_daily_stats()


@router.get("/kpis", response_model=KpiResponse)
@limiter.limit(API_DEFAULT_LIMIT)
async def get_kpis(
    request: Request,
    current_user: AdminUser = Depends(get_current_user),
    analytics_service: AnalyticsService = Depends(get_analytics_service),
) -> KpiResponse:
    """KPI blocks for today, this month and this year."""
    return await analytics_service.get_kpis()


@router.get("/today-records", response_model=list[TodayRecord])
@limiter.limit(API_DEFAULT_LIMIT)
async def get_today_records(
    request: Request,
    current_user: AdminUser = Depends(get_current_user),
    analytics_service: AnalyticsService = Depends(get_analytics_service),
) -> list[TodayRecord]:
    """Today's attendance rows with employee names and hours worked."""
    return await analytics_service.get_today_records()


@router.get("/checkin-status", response_model=list[CheckinStatus])
@limiter.limit(API_DEFAULT_LIMIT)
async def get_checkin_status(
    request: Request,
    current_user: AdminUser = Depends(get_current_user),
    analytics_service: AnalyticsService = Depends(get_analytics_service),
) -> list[CheckinStatus]:
    """Today's state of every active employee."""
    return await analytics_service.get_checkin_status()


@router.get("/employee-leave-summary", response_model=list[EmployeeLeaveSummary])
@limiter.limit(API_DEFAULT_LIMIT)
async def get_employee_leave_summary(
    request: Request,
    current_user: AdminUser = Depends(get_current_user),
    analytics_service: AnalyticsService = Depends(get_analytics_service),
) -> list[EmployeeLeaveSummary]:
    """Leave balance of every active employee."""
    return await analytics_service.get_employee_leave_summary()
