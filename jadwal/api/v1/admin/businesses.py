# ============================================================================
# jadwal/api/v1/admin/businesses.py
# Super-admin tenant oversight
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from uuid import UUID

from jadwal.config.database import get_db
from jadwal.api.dependencies import CurrentUser, require_admin
from jadwal.services.business.business_service import BusinessService

router = APIRouter(prefix="/admin/businesses", tags=["admin"])


@router.get("")
async def list_businesses(
        current_user: CurrentUser = Depends(require_admin),
        db: Session = Depends(get_db)
):
    businesses = BusinessService.list_businesses(db)
    return {
        "total": len(businesses),
        "businesses": [b.to_dict() for b in businesses],
    }


@router.delete("/{business_id}")
async def deactivate_business(
        business_id: UUID,
        current_user: CurrentUser = Depends(require_admin),
        db: Session = Depends(get_db)
):
    BusinessService.deactivate_business(db, business_id)
    return {"success": True}
