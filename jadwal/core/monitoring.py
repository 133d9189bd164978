"""Health checks for the booking API"""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from jadwal.config.database import get_db
from jadwal.config.redis import get_redis
from jadwal.config.settings import get_settings
from jadwal.models.business import Business

health_router = APIRouter()


@health_router.get("/")
async def health_check():
    """Liveness plus the booking settings slots are computed with"""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "timezone": settings.BUSINESS_TIMEZONE,
        "slot_interval_minutes": settings.SLOT_INTERVAL_MINUTES,
    }


@health_router.get("/detailed")
async def detailed_health_check(db: Session = Depends(get_db)):
    """
    Database and notification channel status.

    Redis only carries dashboard notifications, so a Redis outage degrades
    the report but booking keeps working. With notifications switched off
    Redis is not contacted at all.
    """
    settings = get_settings()
    checks = {
        "api": "healthy",
        "database": "unknown",
        "notifications": "unknown",
        "bookable_businesses": None,
        "overall": "unknown"
    }

    try:
        db.execute(text("SELECT 1"))
        checks["database"] = "healthy"
        checks["bookable_businesses"] = db.query(Business).filter(
            Business.is_active == True  # noqa: E712
        ).count()
    except Exception as e:
        checks["database"] = f"unhealthy: {str(e)}"

    if not settings.NOTIFICATIONS_ENABLED:
        checks["notifications"] = "disabled"
    else:
        try:
            redis_client = await get_redis()
            await redis_client.ping()
            checks["notifications"] = "healthy"
        except Exception as e:
            checks["notifications"] = f"unhealthy: {str(e)}"

    if checks["database"] != "healthy":
        checks["overall"] = "unhealthy"
    elif checks["notifications"] in ("healthy", "disabled"):
        checks["overall"] = "healthy"
    else:
        checks["overall"] = "degraded"

    return checks
