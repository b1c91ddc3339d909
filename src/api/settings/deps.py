"""Shared dependencies for the settings routers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dependencies import require_permission
from src.database import get_db
from src.settings.service import SettingsService


async def get_settings_service(db: AsyncSession = Depends(get_db)) -> SettingsService:
    return SettingsService(db)


can_create = Depends(require_permission("settings:create"))
can_read = Depends(require_permission("settings:read"))
can_update = Depends(require_permission("settings:update"))
can_delete = Depends(require_permission("settings:delete"))
