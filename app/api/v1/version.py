"""
Version and metadata endpoint
"""
from fastapi import APIRouter
from app.core.config import settings
from app.constants import SERVICE_NAME, DEFAULT_VERSION

router = APIRouter()


@router.get("/version")
async def get_version():
    """
    Get application version and metadata

    Returns:
        Service name, version, environment and the attendance rules in effect
    """
    return {
        "service": SERVICE_NAME,
        "version": settings.VERSION or DEFAULT_VERSION,
        "env": settings.APP_ENV,
        "tz": settings.OFFICE_TZ,
        "work_start_hour": settings.WORK_START_HOUR,
        "half_day_hours": settings.HALF_DAY_HOURS,
    }
