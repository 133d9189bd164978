# ============================================================================
# jadwal/api/v1/public/booking.py
# Customer-facing booking page endpoints - no authentication
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from uuid import UUID
import logging

from jadwal.config.database import get_db
from jadwal.schemas.booking import BookingCreate, SlotsResponse
from jadwal.services.appointment.appointment_service import AppointmentService
from jadwal.services.availability.availability_service import AvailabilityService
from jadwal.services.business.business_service import BusinessService
from jadwal.services.business.operating_hours_service import OperatingHoursService
from jadwal.services.catalog.service_catalog_service import ServiceCatalogService
from jadwal.services.catalog.staff_service import StaffService
from jadwal.services.notification.notification_service import NotificationService, get_notifier

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/booking", tags=["public-booking"])


@router.get("/{slug}")
async def get_booking_page(slug: str, db: Session = Depends(get_db)):
    """
    Everything the booking page needs: business, active services, active staff
    and weekly operating hours.
    """
    business = BusinessService.get_business_by_slug(db, slug)

    return {
        "business": business.to_dict(),
        "services": [s.to_dict() for s in ServiceCatalogService.list_services(db, business.id)],
        "staff": [s.to_dict() for s in StaffService.list_staff(db, business.id)],
        "operating_hours": [h.to_dict() for h in OperatingHoursService.get_operating_hours(db, business.id)],
    }


@router.get("/{slug}/slots", response_model=SlotsResponse)
async def get_available_slots(
        slug: str,
        date: date = Query(..., description="Calendar date, YYYY-MM-DD"),
        service_id: UUID = Query(..., alias="serviceId"),
        staff_id: Optional[UUID] = Query(None, alias="staffId"),
        db: Session = Depends(get_db)
):
    """Candidate start times for a service on a date, in business local time"""
    business = BusinessService.get_business_by_slug(db, slug)

    slots = AvailabilityService.get_available_slots(
        db=db,
        business_id=business.id,
        day=date,
        service_id=service_id,
        staff_id=staff_id
    )
    return {"slots": slots}


@router.post("/{slug}")
async def create_booking(
        slug: str,
        booking: BookingCreate,
        db: Session = Depends(get_db),
        notifier: NotificationService = Depends(get_notifier)
):
    """Book a slot. Returns 409 when the slot was taken in the meantime."""
    business = BusinessService.get_business_by_slug(db, slug)

    try:
        appointment = await AppointmentService.create_appointment(
            db=db,
            business_id=business.id,
            service_id=booking.service_id,
            staff_id=booking.staff_id,
            day=booking.date,
            time=booking.time,
            customer_name=booking.customer_name,
            customer_phone=booking.customer_phone,
            notes=booking.notes,
            notifier=notifier
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {"appointment": appointment.to_dict()}
