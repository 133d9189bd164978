# jadwal/models/__init__.py
from .base import Base
from .business import Business, OperatingHours, SubscriptionTier, BusinessCategory, DayOfWeek
from .service import Service
from .staff import Staff
from .customer import Customer
from .appointment import Appointment, AppointmentStatus, PaymentStatus, RescheduleState, TERMINAL_STATUSES

__all__ = [
    "Base",
    "Business",
    "OperatingHours",
    "SubscriptionTier",
    "BusinessCategory",
    "DayOfWeek",
    "Service",
    "Staff",
    "Customer",
    "Appointment",
    "AppointmentStatus",
    "PaymentStatus",
    "RescheduleState",
    "TERMINAL_STATUSES",
]
