# jadwal/services/catalog/staff_service.py
"""Staff roster management"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from jadwal.core.exceptions import NotFoundError
from jadwal.models.business import Business
from jadwal.models.staff import Staff
from jadwal.services.capacity.capacity_policy import STAFF, enforce_capacity

logger = logging.getLogger(__name__)


class StaffService:
    """Handles the staff roster of a business"""

    @staticmethod
    def list_staff(db: Session, business_id, include_inactive: bool = False) -> List[Staff]:
        query = db.query(Staff).filter(Staff.business_id == business_id)
        if not include_inactive:
            query = query.filter(Staff.is_active == True)  # noqa: E712
        return query.order_by(Staff.name.asc(), Staff.id.asc()).all()

    @staticmethod
    def get_staff(db: Session, staff_id) -> Staff:
        member = db.query(Staff).filter(Staff.id == staff_id).first()
        if not member:
            raise NotFoundError("Staff", staff_id)
        return member

    @staticmethod
    def create_staff(
            db: Session,
            business: Business,
            name: str,
            email: Optional[str] = None,
            phone: Optional[str] = None
    ) -> Staff:
        """
        Add a staff member.

        Raises:
            CapacityExceededError: the business's tier is full
        """
        enforce_capacity(db, business, STAFF)

        member = Staff(
            business_id=business.id,
            name=name,
            email=email or None,
            phone=phone or None,
            is_active=True,
        )
        db.add(member)
        db.commit()
        db.refresh(member)

        logger.info(f"Created staff {member.id}: {member.name}")
        return member

    @staticmethod
    def update_staff(
            db: Session,
            staff_id,
            name: Optional[str] = None,
            email: Optional[str] = None,
            phone: Optional[str] = None
    ) -> Staff:
        member = StaffService.get_staff(db, staff_id)

        if name is not None:
            member.name = name
        if email is not None:
            member.email = email or None
        if phone is not None:
            member.phone = phone or None

        db.commit()
        db.refresh(member)
        return member

    @staticmethod
    def set_active(db: Session, staff_id, is_active: bool) -> Staff:
        member = StaffService.get_staff(db, staff_id)
        if member.is_active == is_active:
            return member

        if is_active:
            business = db.query(Business).filter(Business.id == member.business_id).first()
            enforce_capacity(db, business, STAFF)

        member.is_active = is_active
        db.commit()
        db.refresh(member)

        logger.info(f"Staff {staff_id} {'activated' if is_active else 'deactivated'}")
        return member

    @staticmethod
    def toggle_status(db: Session, staff_id) -> Staff:
        member = StaffService.get_staff(db, staff_id)
        return StaffService.set_active(db, staff_id, not member.is_active)
