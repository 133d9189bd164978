# ============================================================================
# jadwal/api/v1/dashboard/staff.py
# Staff roster management
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from uuid import UUID

from jadwal.config.database import get_db
from jadwal.api.dependencies import CurrentUser, ensure_business_access, get_current_user
from jadwal.schemas.catalog import StaffCreate, StaffUpdate
from jadwal.services.business.business_service import BusinessService
from jadwal.services.catalog.staff_service import StaffService

router = APIRouter(tags=["dashboard-staff"])


@router.get("/businesses/{business_id}/staff")
async def list_staff(
        business_id: UUID,
        include_inactive: bool = True,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    ensure_business_access(current_user, business_id)

    members = StaffService.list_staff(db, business_id, include_inactive=include_inactive)
    return {
        "total": len(members),
        "staff": [m.to_dict() for m in members],
    }


@router.post("/businesses/{business_id}/staff")
async def create_staff(
        business_id: UUID,
        data: StaffCreate,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """Add a staff member. Refused with 403 when the subscription tier is full."""
    ensure_business_access(current_user, business_id)
    business = BusinessService.get_business(db, business_id)

    member = StaffService.create_staff(
        db,
        business,
        name=data.name,
        email=data.email,
        phone=data.phone
    )
    return member.to_dict()


@router.patch("/staff/{staff_id}")
async def update_staff(
        staff_id: UUID,
        data: StaffUpdate,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    member = StaffService.get_staff(db, staff_id)
    ensure_business_access(current_user, member.business_id)

    member = StaffService.update_staff(db, staff_id, **data.model_dump(exclude_unset=True))
    return member.to_dict()


@router.patch("/staff/{staff_id}/status")
async def toggle_staff_status(
        staff_id: UUID,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """Flip active/inactive. Reactivating counts against the tier limit."""
    member = StaffService.get_staff(db, staff_id)
    ensure_business_access(current_user, member.business_id)

    return StaffService.toggle_status(db, staff_id).to_dict()


@router.delete("/staff/{staff_id}")
async def delete_staff(
        staff_id: UUID,
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
):
    """Soft delete; appointments keep pointing at the staff row"""
    member = StaffService.get_staff(db, staff_id)
    ensure_business_access(current_user, member.business_id)

    StaffService.set_active(db, staff_id, False)
    return {
        "success": True,
        "message": "Staff deactivated"
    }
