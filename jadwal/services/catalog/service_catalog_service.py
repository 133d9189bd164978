# jadwal/services/catalog/service_catalog_service.py
"""Service catalog management (what a business sells)"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from jadwal.core.exceptions import NotFoundError
from jadwal.models.business import Business
from jadwal.models.service import Service
from jadwal.services.capacity.capacity_policy import SERVICES, enforce_capacity

logger = logging.getLogger(__name__)


class ServiceCatalogService:
    """CRUD for services; deletion is a soft delete"""

    @staticmethod
    def list_services(db: Session, business_id, include_inactive: bool = False) -> List[Service]:
        query = db.query(Service).filter(Service.business_id == business_id)
        if not include_inactive:
            query = query.filter(Service.is_active == True)  # noqa: E712
        return query.order_by(Service.name.asc()).all()

    @staticmethod
    def get_service(db: Session, service_id) -> Service:
        service = db.query(Service).filter(Service.id == service_id).first()
        if not service:
            raise NotFoundError("Service", service_id)
        return service

    @staticmethod
    def create_service(
            db: Session,
            business: Business,
            name: str,
            duration: int,
            price: int,
            description: Optional[str] = None
    ) -> Service:
        """
        Add a service to the catalog.

        Raises:
            CapacityExceededError: the business's tier is full
        """
        enforce_capacity(db, business, SERVICES)

        service = Service(
            business_id=business.id,
            name=name,
            description=description,
            duration=duration,
            price=price,
            is_active=True,
        )
        db.add(service)
        db.commit()
        db.refresh(service)

        logger.info(f"Created service {service.id}: {service.name}")
        return service

    @staticmethod
    def update_service(
            db: Session,
            service_id,
            name: Optional[str] = None,
            duration: Optional[int] = None,
            price: Optional[int] = None,
            description: Optional[str] = None,
            is_active: Optional[bool] = None
    ) -> Service:
        """
        Update a service. Existing appointments keep the end time and price they
        were booked with.
        """
        service = ServiceCatalogService.get_service(db, service_id)

        if is_active and not service.is_active:
            # Reactivation takes a slot in the tier like a new service
            enforce_capacity(db, service.business, SERVICES)

        if name is not None:
            service.name = name
        if description is not None:
            service.description = description
        if duration is not None:
            service.duration = duration
        if price is not None:
            service.price = price
        if is_active is not None:
            service.is_active = is_active

        db.commit()
        db.refresh(service)

        logger.info(f"Updated service {service_id}")
        return service

    @staticmethod
    def deactivate_service(db: Session, service_id) -> Service:
        """Soft delete: appointments still reference the row"""
        service = ServiceCatalogService.get_service(db, service_id)
        service.is_active = False
        db.commit()
        db.refresh(service)

        logger.info(f"Soft deleted service {service_id}")
        return service
