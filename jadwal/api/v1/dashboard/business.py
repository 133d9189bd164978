# ============================================================================
# jadwal/api/v1/dashboard/business.py
# Onboarding, profile, operating hours and plan information
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from uuid import UUID
import logging

from jadwal.config.database import get_db
from jadwal.api.dependencies import CurrentUser, ensure_business_access, get_current_user
from jadwal.schemas.catalog import BusinessUpdate, OnboardingRequest, OperatingHoursBulkUpdate
from jadwal.services.appointment.appointment_service import AppointmentService
from jadwal.services.business.business_service import BusinessService
from jadwal.services.business.operating_hours_service import OperatingHoursService
from jadwal.services.capacity.capacity_policy import STAFF, SERVICES, count_active, get_tier_limits
from jadwal.services.catalog.service_catalog_service import ServiceCatalogService
from jadwal.services.catalog.staff_service import StaffService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/businesses", tags=["dashboard-business"])


@router.get("/check-slug/{slug}")
async def check_slug(
        slug: str,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """Whether a booking link is still free, asked while filling the onboarding form"""
    return {"slug": slug, "available": BusinessService.is_slug_available(db, slug)}


@router.post("")
async def onboard_business(
        data: OnboardingRequest,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Create the caller's business with weekly hours, the owner as first staff
    member and starter services for its category.
    """
    registration = data.business
    hours = data.operating_hours

    try:
        business = BusinessService.onboard_business(
            db,
            name=registration.name,
            slug=registration.slug,
            category=registration.category.value,
            owner_name=registration.owner_name,
            owner_email=registration.owner_email,
            phone=registration.phone,
            address=registration.address,
            description=registration.description,
            open_time=hours.open_time,
            close_time=hours.close_time,
            work_days=[day.value for day in hours.work_days],
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    logger.info(f"User {current_user.user_id} onboarded business {business.id}")
    return {"business": business.to_dict()}


@router.get("/{business_id}/operating-hours")
async def get_operating_hours(
        business_id: UUID,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    ensure_business_access(current_user, business_id)

    rows = OperatingHoursService.get_operating_hours(db, business_id)
    return {"operating_hours": [row.to_dict() for row in rows]}


@router.put("/{business_id}/operating-hours")
async def set_operating_hours(
        business_id: UUID,
        data: OperatingHoursBulkUpdate,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """Insert or update weekday rows; `applyToAll` copies the first entry to every day"""
    ensure_business_access(current_user, business_id)
    BusinessService.get_business(db, business_id)

    entries = [
        {
            "day_of_week": entry.day_of_week.value,
            "open_time": entry.open_time,
            "close_time": entry.close_time,
            "is_closed": entry.is_closed,
        }
        for entry in data.hours
    ]
    try:
        rows = OperatingHoursService.set_operating_hours(
            db, business_id, entries, apply_to_all=data.apply_to_all
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {"operating_hours": [row.to_dict() for row in rows]}


@router.get("/{business_id}/tier")
async def get_tier(
        business_id: UUID,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """Current tier, its limits and how much of them is used"""
    ensure_business_access(current_user, business_id)
    business = BusinessService.get_business(db, business_id)

    return {
        "tier": business.subscription_tier,
        "limits": get_tier_limits(business.subscription_tier),
        "usage": {
            "staff": count_active(db, business_id, STAFF),
            "services": count_active(db, business_id, SERVICES),
        },
    }


@router.patch("/{business_id}")
async def update_business(
        business_id: UUID,
        data: BusinessUpdate,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """Edit name, category, contact details and description"""
    ensure_business_access(current_user, business_id)

    business = BusinessService.update_business(db, business_id, **data.model_dump(exclude_unset=True))
    return {"business": business.to_dict()}


@router.get("/{business_id}/overview")
async def get_overview(
        business_id: UUID,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Dashboard landing data in one call: profile, full catalog and roster
    (inactive included), upcoming appointments, weekly hours and plan limits.
    """
    ensure_business_access(current_user, business_id)
    business = BusinessService.get_business(db, business_id)

    return {
        "business": business.to_dict(),
        "services": [s.to_dict() for s in ServiceCatalogService.list_services(db, business_id, include_inactive=True)],
        "staff": [s.to_dict() for s in StaffService.list_staff(db, business_id, include_inactive=True)],
        "upcoming_appointments": AppointmentService.list_upcoming(db, business_id),
        "operating_hours": [row.to_dict() for row in OperatingHoursService.get_operating_hours(db, business_id)],
        "tier_limits": get_tier_limits(business.subscription_tier),
    }
