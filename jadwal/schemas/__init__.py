# jadwal/schemas/__init__.py
from .booking import (
    BookingCreate,
    StatusUpdate,
    RescheduleRequest,
    SuggestSlotRequest,
    ConfirmRescheduleRequest,
    Slot,
    SlotsResponse
)

from .catalog import (
    BusinessRegistration,
    OnboardingHours,
    OnboardingRequest,
    ServiceCreate,
    ServiceUpdate,
    StaffCreate,
    StaffUpdate,
    OperatingHoursEntry,
    OperatingHoursBulkUpdate
)

__all__ = [
    "BookingCreate",
    "StatusUpdate",
    "RescheduleRequest",
    "SuggestSlotRequest",
    "ConfirmRescheduleRequest",
    "Slot",
    "SlotsResponse",
    "BusinessRegistration",
    "OnboardingHours",
    "OnboardingRequest",
    "ServiceCreate",
    "ServiceUpdate",
    "StaffCreate",
    "StaffUpdate",
    "OperatingHoursEntry",
    "OperatingHoursBulkUpdate",
]
