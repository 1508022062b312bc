"""Project settings router."""

from fastapi import APIRouter, Depends, Request

from attendance_api.dependencies import get_settings_service
from attendance_api.models.domain.admin_user import AdminUser
from attendance_api.models.dto.settings import ProjectSettingsResponse, ProjectSettingsUpdate
from attendance_api.security.auth import get_current_user
from attendance_api.security.rate_limit import API_DEFAULT_LIMIT, limiter
from attendance_api.services.settings_service import SettingsService

router = APIRouter()


@router.get("", response_model=ProjectSettingsResponse)
@limiter.limit(API_DEFAULT_LIMIT)
async def get_project_settings(
    request: Request,
    current_user: AdminUser = Depends(get_current_user),
    settings_service: SettingsService = Depends(get_settings_service),
) -> ProjectSettingsResponse:
    """Get project start date and leave policy."""
    return await settings_service.get_project_settings()


@router.put("", response_model=ProjectSettingsResponse)
@limiter.limit(API_DEFAULT_LIMIT)
async def update_project_settings(
    request: Request,
    body: ProjectSettingsUpdate,
    current_user: AdminUser = Depends(get_current_user),
    settings_service: SettingsService = Depends(get_settings_service),
) -> ProjectSettingsResponse:
    """Update project settings. Omitted fields keep their value."""
    return await settings_service.update_project_settings(body)
