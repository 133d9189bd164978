"""
API v1 router setup
Organized into: public, dashboard (JWT) and admin routes
"""
from fastapi import APIRouter

from jadwal.api.v1.public import booking, appointments as public_appointments
from jadwal.api.v1.dashboard import appointments, services, staff, business
from jadwal.api.v1.admin import businesses

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES (No authentication required)
# ============================================================================
api_v1_router.include_router(
    booking.router,
    # booking.router already has the "/booking" prefix
    tags=["Public"]
)

api_v1_router.include_router(
    public_appointments.router,
    tags=["Public"]
)

# ============================================================================
# DASHBOARD ROUTES (JWT authentication required)
# ============================================================================
api_v1_router.include_router(
    business.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    appointments.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    services.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    staff.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)

# ============================================================================
# ADMIN ROUTES (JWT authentication + admin role required)
# ============================================================================
api_v1_router.include_router(
    businesses.router,
    # businesses.router already has the "/admin/businesses" prefix
    tags=["Admin"]
)


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and available endpoints.
    Shows the structure of all API routes organized by authentication type.
    """
    return {
        "version": "1.0",
        "authentication": {
            "public": "No authentication required",
            "dashboard": "JWT Bearer token required (business owner)",
            "admin": "JWT Bearer token + admin role required"
        }
    }
