# jadwal/services/capacity/capacity_policy.py
"""
Subscription tier limits for staff and services.
"""
import logging
from typing import Dict, Optional

from sqlalchemy.orm import Session

from jadwal.core.exceptions import CapacityExceededError
from jadwal.models.business import Business, SubscriptionTier
from jadwal.models.service import Service
from jadwal.models.staff import Staff

logger = logging.getLogger(__name__)

UNLIMITED = -1

STAFF = "staff"
SERVICES = "services"

# -1 means unlimited
TIER_LIMITS: Dict[str, Dict] = {
    SubscriptionTier.FREE.value: {
        "max_staff": 2,
        "max_services": 5,
        "features": ["basic_booking", "calendar_view"],
    },
    SubscriptionTier.PRO.value: {
        "max_staff": 10,
        "max_services": 20,
        "features": ["basic_booking", "calendar_view", "reschedule", "notifications", "analytics"],
    },
    SubscriptionTier.BUSINESS.value: {
        "max_staff": UNLIMITED,
        "max_services": UNLIMITED,
        "features": [
            "basic_booking", "calendar_view", "reschedule", "notifications",
            "analytics", "chat", "payment", "custom_branding",
        ],
    },
}

_LIMIT_KEYS = {STAFF: "max_staff", SERVICES: "max_services"}


def get_tier_limits(tier: Optional[str]) -> Dict:
    """Limits for a tier. Missing or unknown tiers fall back to free."""
    return TIER_LIMITS.get((tier or "").lower(), TIER_LIMITS[SubscriptionTier.FREE.value])


def get_limit(tier: Optional[str], kind: str) -> int:
    if kind not in _LIMIT_KEYS:
        raise ValueError(f"Unknown capacity kind: {kind}")
    return get_tier_limits(tier)[_LIMIT_KEYS[kind]]


def check_capacity(tier: Optional[str], kind: str, current_count: int) -> bool:
    """True when one more member of `kind` fits into the tier."""
    limit = get_limit(tier, kind)
    if limit == UNLIMITED:
        return True
    return current_count < limit


def count_active(db: Session, business_id, kind: str) -> int:
    """Only active (non-deactivated) rows count against the limit."""
    model = Staff if kind == STAFF else Service
    return db.query(model).filter(
        model.business_id == business_id,
        model.is_active == True  # noqa: E712
    ).count()


def enforce_capacity(db: Session, business: Business, kind: str) -> None:
    """
    Refuse a new staff member or service when the business's tier is full.

    Call right before inserting (or reactivating) the row. Existing rows above
    the limit, e.g. after a downgrade, are left alone.

    Raises:
        CapacityExceededError: tier limit reached
    """
    tier = business.subscription_tier or SubscriptionTier.FREE.value
    current = count_active(db, business.id, kind)

    if not check_capacity(tier, kind, current):
        limit = get_limit(tier, kind)
        logger.info(
            f"Capacity refused for business {business.id}: {current} active {kind}, {tier} limit {limit}"
        )
        raise CapacityExceededError(tier=tier, kind=kind, limit=limit)
