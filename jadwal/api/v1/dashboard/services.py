# ============================================================================
# jadwal/api/v1/dashboard/services.py
# Service catalog management
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from uuid import UUID
import logging

from jadwal.config.database import get_db
from jadwal.api.dependencies import CurrentUser, ensure_business_access, get_current_user
from jadwal.schemas.catalog import ServiceCreate, ServiceUpdate
from jadwal.services.business.business_service import BusinessService
from jadwal.services.catalog.service_catalog_service import ServiceCatalogService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["dashboard-services"])


@router.get("/businesses/{business_id}/services")
async def list_services(
        business_id: UUID,
        include_inactive: bool = False,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    ensure_business_access(current_user, business_id)

    services = ServiceCatalogService.list_services(db, business_id, include_inactive=include_inactive)
    return {
        "total": len(services),
        "services": [s.to_dict() for s in services],
    }


@router.post("/businesses/{business_id}/services")
async def create_service(
        business_id: UUID,
        data: ServiceCreate,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """
    Create a new service. Refused with 403 when the subscription tier is full.
    """
    ensure_business_access(current_user, business_id)
    business = BusinessService.get_business(db, business_id)

    service = ServiceCatalogService.create_service(
        db,
        business,
        name=data.name,
        duration=data.duration,
        price=data.price,
        description=data.description
    )
    return service.to_dict()


@router.patch("/services/{service_id}")
async def update_service(
        service_id: UUID,
        data: ServiceUpdate,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    service = ServiceCatalogService.get_service(db, service_id)
    ensure_business_access(current_user, service.business_id)

    service = ServiceCatalogService.update_service(
        db,
        service_id,
        **data.model_dump(exclude_unset=True)
    )
    return service.to_dict()


@router.delete("/services/{service_id}")
async def delete_service(
        service_id: UUID,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """Soft delete: the service disappears from the booking page, history keeps it"""
    service = ServiceCatalogService.get_service(db, service_id)
    ensure_business_access(current_user, service.business_id)

    ServiceCatalogService.deactivate_service(db, service_id)
    return {
        "success": True,
        "message": "Service deactivated"
    }
