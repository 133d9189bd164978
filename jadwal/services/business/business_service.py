# jadwal/services/business/business_service.py
"""Service for managing business (tenant) operations"""
import logging
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from jadwal.core.exceptions import NotFoundError, SlugTakenError
from jadwal.models.business import Business, BusinessCategory, DayOfWeek, OperatingHours, SubscriptionTier
from jadwal.models.service import Service
from jadwal.models.staff import Staff
from jadwal.services.business.operating_hours_service import validate_hours
from jadwal.services.business.service_templates import SERVICE_TEMPLATES
from jadwal.services.capacity.capacity_policy import SERVICES, check_capacity

logger = logging.getLogger(__name__)


class BusinessService:
    """Handles business-related operations"""

    @staticmethod
    def get_business(db: Session, business_id) -> Business:
        business = db.query(Business).filter(Business.id == business_id).first()
        if not business:
            raise NotFoundError("Business", business_id)
        return business

    @staticmethod
    def get_business_by_slug(db: Session, slug: str, active_only: bool = True) -> Business:
        """Resolve a public booking link. Deactivated businesses are not bookable."""
        query = db.query(Business).filter(Business.slug == slug)
        if active_only:
            query = query.filter(Business.is_active == True)  # noqa: E712
        business = query.first()
        if not business:
            raise NotFoundError("Business", slug)
        return business

    @staticmethod
    def is_slug_available(db: Session, slug: str) -> bool:
        return db.query(Business.id).filter(Business.slug == slug).first() is None

    @staticmethod
    def onboard_business(
            db: Session,
            name: str,
            slug: str,
            category: str,
            owner_name: str,
            owner_email: str,
            open_time: str,
            close_time: str,
            work_days: Sequence[str],
            phone: Optional[str] = None,
            address: Optional[str] = None,
            description: Optional[str] = None
    ) -> Business:
        """
        Create a business with its weekly hours, the owner as first staff member
        and the starter services of its category, in one transaction.

        Days not listed in `work_days` are created closed.
        """
        category = BusinessCategory(category).value
        work_days = {DayOfWeek(day).value for day in work_days}
        validate_hours(open_time, close_time, is_closed=False)

        if not BusinessService.is_slug_available(db, slug):
            raise SlugTakenError(slug)

        business = Business(
            name=name,
            slug=slug,
            category=category,
            owner_name=owner_name,
            owner_email=owner_email,
            phone=phone,
            address=address,
            description=description,
            subscription_tier=SubscriptionTier.FREE.value,
            is_active=True,
        )
        db.add(business)
        db.flush()

        for day in DayOfWeek:
            db.add(OperatingHours(
                business_id=business.id,
                day_of_week=day.value,
                open_time=open_time,
                close_time=close_time,
                is_closed=day.value not in work_days,
            ))

        db.add(Staff(
            business_id=business.id,
            name=owner_name,
            email=owner_email,
            phone=phone,
            is_active=True,
        ))

        created = 0
        for template in SERVICE_TEMPLATES.get(category, []):
            if not check_capacity(business.subscription_tier, SERVICES, created):
                break
            db.add(Service(business_id=business.id, is_active=True, **template))
            created += 1

        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(business)

        logger.info(f"Onboarded business {business.id} ({slug}) with {created} starter services")
        return business

    @staticmethod
    def update_business(
            db: Session,
            business_id,
            name: Optional[str] = None,
            category: Optional[str] = None,
            owner_name: Optional[str] = None,
            phone: Optional[str] = None,
            address: Optional[str] = None,
            description: Optional[str] = None
    ) -> Business:
        """Edit the public profile. Tier, slug and activation are changed elsewhere."""
        business = BusinessService.get_business(db, business_id)

        if name is not None:
            business.name = name
        if category is not None:
            business.category = BusinessCategory(category).value
        if owner_name is not None:
            business.owner_name = owner_name
        if phone is not None:
            business.phone = phone
        if address is not None:
            business.address = address
        if description is not None:
            business.description = description

        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(business)

        logger.info(f"Updated business profile {business_id}")
        return business

    @staticmethod
    def list_businesses(db: Session) -> List[Business]:
        return db.query(Business).order_by(Business.created_at.desc()).all()

    @staticmethod
    def deactivate_business(db: Session, business_id) -> Business:
        """Super-admin switch; the booking page disappears, data is kept"""
        business = BusinessService.get_business(db, business_id)
        business.is_active = False
        db.commit()
        db.refresh(business)

        logger.info(f"Deactivated business {business_id}")
        return business
