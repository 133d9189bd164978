from typing import List, Dict, Optional, Sequence, Tuple
from datetime import date, datetime, timedelta
from sqlalchemy.orm import Session
from jadwal.config.settings import get_settings
from jadwal.models.appointment import Appointment, AppointmentStatus
from jadwal.models.business import OperatingHours, DayOfWeek
from jadwal.models.service import Service
from jadwal.models.staff import Staff
from jadwal.utils.clock import local_now, day_bounds, combine_date_time, format_hhmm
import logging

logger = logging.getLogger(__name__)

Interval = Tuple[datetime, datetime]


def intervals_overlap(start: datetime, end: datetime, other_start: datetime, other_end: datetime) -> bool:
    """Half-open [start, end) overlap test"""
    return start < other_end and end > other_start


def generate_candidate_starts(
        day: date,
        open_time: str,
        close_time: str,
        duration_minutes: int,
        interval_minutes: int
) -> List[datetime]:
    """
    Candidate start times from opening, every `interval_minutes`, while the whole
    service still ends by closing time. The cadence does not depend on the
    service duration, so consecutive candidates may overlap.
    """
    current_slot = combine_date_time(day, open_time)
    day_end = combine_date_time(day, close_time)
    duration = timedelta(minutes=duration_minutes)
    step = timedelta(minutes=interval_minutes)

    starts = []
    while current_slot + duration <= day_end:
        starts.append(current_slot)
        current_slot += step
    return starts


class AvailabilityService:
    """Bookable slots from operating hours and existing appointments"""

    @staticmethod
    def get_available_slots(
            db: Session,
            business_id,
            day: date,
            service_id,
            staff_id=None,
            now: Optional[datetime] = None
    ) -> List[Dict]:
        """
        Candidate start times for a service on a date, each flagged available or not.

        A candidate is unavailable when it starts before `now` or when its
        [start, start + duration) overlaps a non-cancelled appointment. With a
        `staff_id` only that staff member's appointments count; without one a
        candidate is available if at least one active staff member is free.

        Returns:
            [{"time": "HH:MM", "available": bool}, ...] ordered by time; empty when
            the service or the chosen active staff member does not resolve for
            this business, and when the business is closed that day.
        """
        service = db.query(Service).filter(
            Service.id == service_id,
            Service.business_id == business_id
        ).first()
        if not service:
            return []

        hours = AvailabilityService.get_day_hours(db, business_id, day)
        if not hours or hours.is_closed:
            return []

        settings = get_settings()
        if now is None:
            now = local_now()

        candidates = generate_candidate_starts(
            day,
            hours.open_time,
            hours.close_time,
            service.duration,
            settings.SLOT_INTERVAL_MINUTES
        )
        if not candidates:
            return []

        if staff_id is not None:
            chosen = db.query(Staff).filter(
                Staff.id == staff_id,
                Staff.business_id == business_id,
                Staff.is_active == True  # noqa: E712
            ).first()
            if not chosen:
                return []
            staff_ids = [chosen.id]
        else:
            staff_ids = [
                s.id for s in db.query(Staff).filter(
                    Staff.business_id == business_id,
                    Staff.is_active == True  # noqa: E712
                ).all()
            ]
            if not staff_ids:
                logger.warning(f"Business {business_id} has no active staff, no slot is bookable")

        busy = AvailabilityService._busy_intervals_by_staff(
            AvailabilityService.get_appointments_by_date(db, business_id, day),
            staff_ids
        )

        duration = timedelta(minutes=service.duration)
        slots = []
        for start in candidates:
            end = start + duration

            is_available = start >= now and any(
                AvailabilityService._is_free(start, end, busy[sid]) for sid in staff_ids
            )

            slots.append({
                "time": format_hhmm(start),
                "available": is_available,
            })

        return slots

    @staticmethod
    def get_day_hours(db: Session, business_id, day: date) -> Optional[OperatingHours]:
        """Operating hours row for the weekday of `day`"""
        weekday = DayOfWeek.from_date(day)
        return db.query(OperatingHours).filter(
            OperatingHours.business_id == business_id,
            OperatingHours.day_of_week == weekday.value
        ).first()

    @staticmethod
    def get_appointments_by_date(db: Session, business_id, day: date) -> List[Appointment]:
        """Non-cancelled appointments of the business starting on `day` (local time)"""
        start_of_day, end_of_day = day_bounds(day)
        return db.query(Appointment).filter(
            Appointment.business_id == business_id,
            Appointment.start_time >= start_of_day,
            Appointment.start_time <= end_of_day,
            Appointment.status != AppointmentStatus.CANCELLED.value
        ).order_by(Appointment.start_time.asc()).all()

    @staticmethod
    def _busy_intervals_by_staff(
            appointments: Sequence[Appointment],
            staff_ids: Sequence
    ) -> Dict[object, List[Interval]]:
        busy: Dict[object, List[Interval]] = {sid: [] for sid in staff_ids}
        for appointment in appointments:
            if appointment.staff_id in busy:
                busy[appointment.staff_id].append((appointment.start_time, appointment.end_time))
        return busy

    @staticmethod
    def _is_free(start: datetime, end: datetime, busy: Sequence[Interval]) -> bool:
        for appt_start, appt_end in busy:
            if intervals_overlap(start, end, appt_start, appt_end):
                return False
        return True
