# jadwal/services/business/operating_hours_service.py
"""Weekly operating hours, one row per (business, weekday)"""
import logging
from typing import Dict, Iterable, List

from sqlalchemy.orm import Session

from jadwal.models.business import DayOfWeek, OperatingHours
from jadwal.utils.clock import to_minutes

logger = logging.getLogger(__name__)

_DAY_ORDER = {day.value: index for index, day in enumerate(DayOfWeek)}


def validate_hours(open_time: str, close_time: str, is_closed: bool) -> None:
    """Closing must come after opening unless the day is closed"""
    open_minutes = to_minutes(open_time)
    close_minutes = to_minutes(close_time)
    if not is_closed and close_minutes <= open_minutes:
        raise ValueError(f"Closing time {close_time} must be after opening time {open_time}")


class OperatingHoursService:

    @staticmethod
    def get_operating_hours(db: Session, business_id) -> List[OperatingHours]:
        """Rows sorted Monday..Sunday"""
        rows = db.query(OperatingHours).filter(OperatingHours.business_id == business_id).all()
        return sorted(rows, key=lambda row: _DAY_ORDER.get(row.day_of_week, len(_DAY_ORDER)))

    @staticmethod
    def set_operating_hours(
            db: Session,
            business_id,
            hours: Iterable[Dict],
            apply_to_all: bool = False
    ) -> List[OperatingHours]:
        """
        Insert or update weekday rows.

        Args:
            hours: dicts with day_of_week, open_time, close_time, is_closed
            apply_to_all: copy the first entry's times and closed flag to all seven days
        """
        entries = [dict(entry) for entry in hours]
        if apply_to_all and entries:
            template = entries[0]
            entries = [
                {
                    "day_of_week": day.value,
                    "open_time": template["open_time"],
                    "close_time": template["close_time"],
                    "is_closed": template.get("is_closed", False),
                }
                for day in DayOfWeek
            ]

        for entry in entries:
            DayOfWeek(entry["day_of_week"])
            validate_hours(entry["open_time"], entry["close_time"], entry.get("is_closed", False))

        existing = {
            row.day_of_week: row
            for row in db.query(OperatingHours).filter(OperatingHours.business_id == business_id).all()
        }

        for entry in entries:
            day = DayOfWeek(entry["day_of_week"]).value
            row = existing.get(day)
            if row is None:
                row = OperatingHours(business_id=business_id, day_of_week=day)
                db.add(row)
                existing[day] = row
            row.open_time = entry["open_time"]
            row.close_time = entry["close_time"]
            row.is_closed = bool(entry.get("is_closed", False))

        db.commit()
        logger.info(f"Updated {len(entries)} operating hours rows for business {business_id}")
        return OperatingHoursService.get_operating_hours(db, business_id)
