# ============================================================================
# jadwal/api/v1/dashboard/appointments.py
# Session authenticated endpoints - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.orm import Session
from datetime import date
from uuid import UUID

from jadwal.config.database import get_db
from jadwal.api.dependencies import CurrentUser, ensure_business_access, get_current_user
from jadwal.schemas.booking import StatusUpdate, SuggestSlotRequest
from jadwal.services.appointment.appointment_service import AppointmentService
from jadwal.services.notification.notification_service import NotificationService, get_notifier

router = APIRouter(tags=["dashboard-appointments"])


@router.get("/businesses/{business_id}/appointments")
async def list_appointments_by_date(
        business_id: UUID,
        date: date = Query(..., description="Calendar date, YYYY-MM-DD"),
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    All appointments starting on a date, including cancelled ones.
    Requires authenticated session.
    """
    ensure_business_access(current_user, business_id)

    appointments = AppointmentService.list_appointments_by_date(db, business_id, date)
    return {
        "business_id": str(business_id),
        "date": date.isoformat(),
        "total_appointments": len(appointments),
        "appointments": appointments,
    }


@router.patch("/appointments/{appointment_id}/status")
async def update_appointment_status(
        data: StatusUpdate,
        appointment_id: UUID = Path(..., description="The appointment ID"),
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db),
        notifier: NotificationService = Depends(get_notifier)
):
    """
    Confirm, complete or cancel an appointment.
    Completed and cancelled appointments can no longer change.
    """
    appointment = AppointmentService.get_appointment(db, appointment_id)
    ensure_business_access(current_user, appointment.business_id)

    appointment = await AppointmentService.update_status(
        db=db,
        appointment_id=appointment_id,
        new_status=data.status,
        notifier=notifier
    )
    return appointment.to_dict()


@router.post("/appointments/{appointment_id}/suggest-slot")
async def suggest_reschedule_slot(
        data: SuggestSlotRequest,
        appointment_id: UUID = Path(..., description="The appointment ID"),
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db),
        notifier: NotificationService = Depends(get_notifier)
):
    """Propose a new time to the customer"""
    appointment = AppointmentService.get_appointment(db, appointment_id)
    ensure_business_access(current_user, appointment.business_id)

    appointment = await AppointmentService.suggest_reschedule_slot(
        db=db,
        appointment_id=appointment_id,
        suggested_slot=data.suggested_slot,
        message=data.message,
        notifier=notifier
    )
    return appointment.to_dict()
