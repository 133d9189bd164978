# ============================================================================
# jadwal/api/v1/public/appointments.py
# Customer reschedule page - reached through the link sent with the booking
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session
from uuid import UUID

from jadwal.config.database import get_db
from jadwal.schemas.booking import RescheduleRequest, ConfirmRescheduleRequest
from jadwal.services.appointment.appointment_service import AppointmentService
from jadwal.services.notification.notification_service import NotificationService, get_notifier

router = APIRouter(prefix="/appointments", tags=["public-appointments"])


@router.get("/{appointment_id}")
async def get_appointment(
        appointment_id: UUID = Path(..., description="The appointment ID"),
        db: Session = Depends(get_db)
):
    """Appointment with service, staff and business summary"""
    return AppointmentService.get_appointment_details(db, appointment_id)


@router.post("/{appointment_id}/reschedule")
async def request_reschedule(
        data: RescheduleRequest,
        appointment_id: UUID = Path(...),
        db: Session = Depends(get_db),
        notifier: NotificationService = Depends(get_notifier)
):
    """Customer asks the business for another time"""
    appointment = await AppointmentService.request_reschedule(
        db=db,
        appointment_id=appointment_id,
        reason=data.reason,
        preferred_date=data.preferred_date,
        preferred_time=data.preferred_time,
        notifier=notifier
    )
    return appointment.to_dict()


@router.post("/{appointment_id}/confirm-reschedule")
async def confirm_reschedule(
        data: ConfirmRescheduleRequest,
        appointment_id: UUID = Path(...),
        db: Session = Depends(get_db),
        notifier: NotificationService = Depends(get_notifier)
):
    """Customer accepts the suggested time"""
    try:
        appointment = await AppointmentService.confirm_reschedule(
            db=db,
            appointment_id=appointment_id,
            new_start_time=data.new_start_time,
            new_end_time=data.new_end_time,
            notifier=notifier
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return appointment.to_dict()
