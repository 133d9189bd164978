# ============================================================================
# jadwal/services/appointment/appointment_service.py
# Appointment lifecycle: booking, status changes, reschedule negotiation
# ============================================================================
"""Service for managing appointments"""
import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jadwal.config.settings import get_settings
from jadwal.core.exceptions import (
    InvalidStatusTransitionError,
    NoStaffAvailableError,
    NotFoundError,
    SlotConflictError,
    SlotNotOfferedError,
)
from jadwal.models.appointment import Appointment, AppointmentStatus, PaymentStatus
from jadwal.models.business import Business
from jadwal.models.customer import Customer
from jadwal.models.service import Service
from jadwal.models.staff import Staff
from jadwal.services.availability.availability_service import AvailabilityService
from jadwal.services.notification.notification_service import NotificationService
from jadwal.utils.clock import combine_date_time, day_bounds, local_now, to_local_naive

logger = logging.getLogger(__name__)

# Name of the PostgreSQL exclusion constraint, see the initial alembic revision
NO_OVERLAP_CONSTRAINT = "appointments_staff_no_overlap"


class AppointmentService:
    """Handles appointment operations"""

    # ------------------------------------------------------------------
    # Booking
    # ------------------------------------------------------------------

    @staticmethod
    async def create_appointment(
            db: Session,
            business_id,
            service_id,
            day: date,
            time: str,
            customer_name: str,
            customer_phone: str,
            staff_id=None,
            notes: Optional[str] = None,
            notifier: Optional[NotificationService] = None,
            now: Optional[datetime] = None
    ) -> Appointment:
        """
        Book a service for a customer.

        The start must be one of the slots the booking page offers for that
        day: open weekday, on the slot grid, ending by closing time and not
        before `now`. Without `staff_id` the first active staff member who is
        free for the whole interval is assigned. The overlap check and the
        insert run in one transaction with the staff row locked, and the new
        row is checked again after it is flushed.

        Raises:
            NotFoundError: service or staff does not resolve for this business
            SlotNotOfferedError: the start is not a bookable slot
            NoStaffAvailableError: no staff given and the active roster is empty
            SlotConflictError: the interval overlaps an existing appointment
        """
        try:
            service = db.query(Service).filter(
                Service.id == service_id,
                Service.business_id == business_id,
                Service.is_active == True  # noqa: E712
            ).first()
            if not service:
                raise NotFoundError("Service", service_id)

            start_time = combine_date_time(day, time)
            end_time = start_time + timedelta(minutes=service.duration)
            AppointmentService._ensure_offered_slot(db, business_id, day, start_time, end_time, now)

            if staff_id is not None:
                staff = AppointmentService._lock_staff(db, business_id, staff_id)
                if not staff:
                    raise NotFoundError("Staff", staff_id)
                if AppointmentService.find_conflict(db, staff.id, start_time, end_time):
                    raise SlotConflictError()
            else:
                staff = AppointmentService._assign_free_staff(db, business_id, start_time, end_time)

            customer = AppointmentService._get_or_create_customer(
                db, business_id, customer_name, customer_phone
            )

            appointment = Appointment(
                business_id=business_id,
                service_id=service.id,
                staff_id=staff.id,
                customer_id=customer.id,
                customer_name=customer_name,
                customer_phone=customer_phone,
                start_time=start_time,
                end_time=end_time,
                notes=notes or None,
                status=AppointmentStatus.PENDING.value,
                total_price=service.price,
                payment_status=PaymentStatus.UNPAID.value,
            )

            db.add(appointment)
            AppointmentService._commit_without_overlap(db, appointment)
        except Exception:
            db.rollback()
            raise

        db.refresh(appointment)
        logger.info(
            f"Created appointment {appointment.id} for business {business_id} "
            f"with staff {staff.id} at {start_time.isoformat()}"
        )

        if notifier:
            await notifier.notify_business(business_id, {
                "type": NotificationService.NEW_BOOKING,
                "appointment": appointment.to_dict(),
                "message": f"New booking from {customer_name}",
            })

        return appointment

    # ------------------------------------------------------------------
    # Status machine
    # ------------------------------------------------------------------

    @staticmethod
    async def update_status(
            db: Session,
            appointment_id,
            new_status,
            notifier: Optional[NotificationService] = None
    ) -> Appointment:
        """
        Move an appointment to `new_status`.

        Completed and cancelled are terminal. Any other move is allowed,
        including confirmed back to pending.
        """
        status = AppointmentStatus(new_status)
        appointment = AppointmentService.get_appointment(db, appointment_id)

        if appointment.status == status.value:
            return appointment

        if appointment.is_terminal:
            raise InvalidStatusTransitionError(appointment.status, status.value)

        previous = appointment.status
        appointment.status = status.value
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(appointment)

        logger.info(f"Appointment {appointment.id} status {previous} -> {status.value}")

        if notifier:
            event = {
                "type": NotificationService.STATUS_CHANGED,
                "appointment_id": str(appointment.id),
                "previous_status": previous,
                "status": status.value,
            }
            await notifier.notify_business(appointment.business_id, event)
            await notifier.notify_customer(appointment.customer_id, event)

        return appointment

    # ------------------------------------------------------------------
    # Reschedule negotiation: request -> suggest -> confirm
    # ------------------------------------------------------------------

    @staticmethod
    async def request_reschedule(
            db: Session,
            appointment_id,
            reason: str,
            preferred_date: Optional[date] = None,
            preferred_time: Optional[str] = None,
            notifier: Optional[NotificationService] = None,
            now: Optional[datetime] = None
    ) -> Appointment:
        """
        Customer asks for a different time. Status is left as is.

        A preferred date and/or time is kept with the reason so the business
        sees it when suggesting a slot.
        """
        appointment = AppointmentService.get_appointment(db, appointment_id)
        AppointmentService._ensure_reschedulable(appointment, "reschedule_requested")

        preferred = " ".join(
            part for part in (preferred_date and preferred_date.isoformat(), preferred_time) if part
        )
        if preferred:
            reason = f"{reason} (preferred: {preferred})"

        appointment.reschedule_requested_at = now or local_now()
        appointment.reschedule_reason = reason
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(appointment)

        logger.info(f"Reschedule requested for appointment {appointment.id}")

        if notifier:
            await notifier.notify_business(appointment.business_id, {
                "type": NotificationService.RESCHEDULE_REQUEST,
                "appointment_id": str(appointment.id),
                "message": f"{appointment.customer_name} requested a new time: {reason}",
            })

        return appointment

    @staticmethod
    async def suggest_reschedule_slot(
            db: Session,
            appointment_id,
            suggested_slot: datetime,
            message: Optional[str] = None,
            notifier: Optional[NotificationService] = None
    ) -> Appointment:
        """Business proposes a new start time; the request fields stay for the customer to review."""
        appointment = AppointmentService.get_appointment(db, appointment_id)
        AppointmentService._ensure_reschedulable(appointment, "reschedule_suggested")

        appointment.suggested_slot = to_local_naive(suggested_slot)
        appointment.suggested_slot_message = message or None
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(appointment)

        logger.info(f"Suggested slot {appointment.suggested_slot} for appointment {appointment.id}")

        if notifier:
            await notifier.notify_customer(appointment.customer_id, {
                "type": NotificationService.RESCHEDULE_SUGGESTION,
                "appointment_id": str(appointment.id),
                "suggested_slot": appointment.suggested_slot.isoformat(),
                "message": appointment.suggested_slot_message,
            })

        return appointment

    @staticmethod
    async def confirm_reschedule(
            db: Session,
            appointment_id,
            new_start_time: datetime,
            new_end_time: datetime,
            notifier: Optional[NotificationService] = None
    ) -> Appointment:
        """
        Customer accepts a new time.

        Moves the appointment, clears the reschedule fields and confirms it.
        The new interval is checked against the staff member's other
        appointments under the same row lock used for booking.

        Raises:
            ValueError: end is not after start
            SlotConflictError: the new interval overlaps another appointment
        """
        new_start_time = to_local_naive(new_start_time)
        new_end_time = to_local_naive(new_end_time)
        if new_end_time <= new_start_time:
            raise ValueError("newEndTime must be after newStartTime")

        appointment = AppointmentService.get_appointment(db, appointment_id)
        AppointmentService._ensure_reschedulable(appointment, AppointmentStatus.CONFIRMED.value)

        try:
            AppointmentService._lock_staff(db, appointment.business_id, appointment.staff_id, active_only=False)
            conflict = AppointmentService.find_conflict(
                db, appointment.staff_id, new_start_time, new_end_time, exclude_id=appointment.id
            )
            if conflict:
                raise SlotConflictError()

            appointment.start_time = new_start_time
            appointment.end_time = new_end_time
            appointment.reschedule_requested_at = None
            appointment.reschedule_reason = None
            appointment.suggested_slot = None
            appointment.suggested_slot_message = None
            appointment.status = AppointmentStatus.CONFIRMED.value
            AppointmentService._commit_without_overlap(db, appointment)
        except Exception:
            db.rollback()
            raise

        db.refresh(appointment)
        logger.info(f"Appointment {appointment.id} rescheduled to {new_start_time.isoformat()}")

        if notifier:
            await notifier.notify_business(appointment.business_id, {
                "type": NotificationService.RESCHEDULE_CONFIRMED,
                "appointment_id": str(appointment.id),
                "start_time": appointment.start_time.isoformat(),
                "message": f"{appointment.customer_name} confirmed the new time",
            })

        return appointment

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def get_appointment(db: Session, appointment_id) -> Appointment:
        appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
        if not appointment:
            raise NotFoundError("Appointment", appointment_id)
        return appointment

    @staticmethod
    def get_appointment_details(db: Session, appointment_id) -> Dict[str, Any]:
        """Appointment with the service, staff and business summary shown on the reschedule page"""
        appointment = AppointmentService.get_appointment(db, appointment_id)
        service = appointment.service
        staff = appointment.staff
        business = db.query(Business).filter(Business.id == appointment.business_id).first()

        data = appointment.to_dict()
        data["service"] = (
            {"name": service.name, "duration": service.duration, "price": service.price}
            if service else None
        )
        data["staff"] = {"name": staff.name} if staff else None
        data["business"] = (
            {"name": business.name, "address": business.address, "slug": business.slug}
            if business else None
        )
        return data

    @staticmethod
    def list_appointments_by_date(db: Session, business_id, day: date) -> List[Dict[str, Any]]:
        """All appointments of a business starting on `day`, cancelled ones included"""
        start_of_day, end_of_day = day_bounds(day)
        appointments = db.query(Appointment).filter(
            Appointment.business_id == business_id,
            Appointment.start_time >= start_of_day,
            Appointment.start_time <= end_of_day
        ).order_by(Appointment.start_time.asc()).all()

        results = []
        for appt in appointments:
            data = appt.to_dict()
            data["service_name"] = appt.service.name if appt.service else None
            data["staff_name"] = appt.staff.name if appt.staff else None
            results.append(data)
        return results

    @staticmethod
    def list_upcoming(db: Session, business_id, now: Optional[datetime] = None, limit: int = 50) -> List[Dict[str, Any]]:
        """Non-cancelled appointments starting from `now`, soonest first"""
        appointments = db.query(Appointment).filter(
            Appointment.business_id == business_id,
            Appointment.status != AppointmentStatus.CANCELLED.value,
            Appointment.start_time >= (now or local_now())
        ).order_by(Appointment.start_time.asc()).limit(limit).all()

        results = []
        for appt in appointments:
            data = appt.to_dict()
            data["service_name"] = appt.service.name if appt.service else None
            data["staff_name"] = appt.staff.name if appt.staff else None
            results.append(data)
        return results

    @staticmethod
    def find_conflict(
            db: Session,
            staff_id,
            start_time: datetime,
            end_time: datetime,
            exclude_id=None
    ) -> Optional[Appointment]:
        """First non-cancelled appointment of the staff member overlapping [start, end)"""
        query = db.query(Appointment).filter(
            Appointment.staff_id == staff_id,
            Appointment.status != AppointmentStatus.CANCELLED.value,
            Appointment.start_time < end_time,
            Appointment.end_time > start_time
        )
        if exclude_id is not None:
            query = query.filter(Appointment.id != exclude_id)
        return query.first()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _lock_staff(db: Session, business_id, staff_id, active_only: bool = True) -> Optional[Staff]:
        """SELECT ... FOR UPDATE on the staff row serializes bookings per staff member"""
        query = db.query(Staff).filter(
            Staff.id == staff_id,
            Staff.business_id == business_id
        )
        if active_only:
            query = query.filter(Staff.is_active == True)  # noqa: E712
        return query.with_for_update().first()

    @staticmethod
    def _assign_free_staff(db: Session, business_id, start_time: datetime, end_time: datetime) -> Staff:
        roster = db.query(Staff).filter(
            Staff.business_id == business_id,
            Staff.is_active == True  # noqa: E712
        ).order_by(Staff.name.asc(), Staff.id.asc()).with_for_update().all()

        if not roster:
            raise NoStaffAvailableError(business_id)

        for member in roster:
            if not AppointmentService.find_conflict(db, member.id, start_time, end_time):
                return member

        raise SlotConflictError("No staff member is free at the selected time")

    @staticmethod
    def _get_or_create_customer(db: Session, business_id, name: str, phone: str) -> Customer:
        customer = db.query(Customer).filter(
            Customer.business_id == business_id,
            Customer.phone == phone
        ).first()
        if customer:
            return customer

        customer = Customer(business_id=business_id, name=name, phone=phone)
        db.add(customer)
        db.flush()
        return customer

    @staticmethod
    def _ensure_reschedulable(appointment: Appointment, requested: str) -> None:
        if appointment.is_terminal:
            raise InvalidStatusTransitionError(appointment.status, requested)

    @staticmethod
    def _ensure_offered_slot(
            db: Session,
            business_id,
            day: date,
            start_time: datetime,
            end_time: datetime,
            now: Optional[datetime] = None
    ) -> None:
        """Reject starts the slots query would never offer"""
        hours = AvailabilityService.get_day_hours(db, business_id, day)
        if not hours or hours.is_closed:
            raise SlotNotOfferedError("the business is closed that day")

        open_at = combine_date_time(day, hours.open_time)
        close_at = combine_date_time(day, hours.close_time)
        minutes = get_settings().SLOT_INTERVAL_MINUTES

        if start_time < open_at or (start_time - open_at) % timedelta(minutes=minutes):
            raise SlotNotOfferedError(f"start must fall on the {minutes} minute grid from {hours.open_time}")
        if end_time > close_at:
            raise SlotNotOfferedError(f"the service would end after closing time {hours.close_time}")
        if start_time < (now or local_now()):
            raise SlotNotOfferedError("the start time has already passed")

    @staticmethod
    def _commit_without_overlap(db: Session, appointment: Appointment) -> None:
        """
        Flush, look for an overlapping row again, then commit.

        The second look sees any row another transaction committed between our
        first check and our flush. On PostgreSQL the exclusion constraint is
        the final word and its violation is reported as SlotConflictError.
        """
        try:
            db.flush()
            conflict = AppointmentService.find_conflict(
                db,
                appointment.staff_id,
                appointment.start_time,
                appointment.end_time,
                exclude_id=appointment.id
            )
            if conflict:
                logger.warning(
                    f"Appointment {conflict.id} took staff {appointment.staff_id} "
                    f"at {appointment.start_time.isoformat()} first"
                )
                raise SlotConflictError()
            db.commit()
        except IntegrityError as e:
            if NO_OVERLAP_CONSTRAINT in str(e.orig):
                raise SlotConflictError() from e
            raise
