# jadwal/core/exceptions.py
"""Domain errors raised by the booking core and translated to HTTP in main.py"""


class BookingError(Exception):
    """Base class for booking domain errors"""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(BookingError):
    """Referenced business, service, staff or appointment does not resolve"""
    status_code = 404

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        if entity_id is None:
            super().__init__(f"{entity} not found")
        else:
            super().__init__(f"{entity} {entity_id} not found")


class NoStaffAvailableError(BookingError):
    """Booking without a staff member while the active roster is empty"""
    status_code = 400

    def __init__(self, business_id=None):
        self.business_id = business_id
        super().__init__("No staff available, add a staff member before accepting bookings")


class CapacityExceededError(BookingError):
    """Subscription tier limit reached when creating staff or services"""
    status_code = 403

    def __init__(self, tier: str, kind: str, limit: int):
        self.tier = tier
        self.kind = kind
        self.limit = limit
        super().__init__(
            f"The {tier} plan allows at most {limit} {kind}. Upgrade to add more."
        )


class SlotConflictError(BookingError):
    """Requested interval overlaps a non-cancelled appointment of the same staff"""
    status_code = 409

    def __init__(self, message: str = "The selected time is no longer available"):
        super().__init__(message)


class InvalidStatusTransitionError(BookingError):
    """Appointment is in a terminal status"""
    status_code = 409

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change appointment from '{current}' to '{requested}'")


class SlugTakenError(BookingError):
    """Booking link slug already belongs to another business"""
    status_code = 409

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Booking link '{slug}' is already taken")


class SlotNotOfferedError(BookingError):
    """Requested start is not a bookable slot: closed day, off the grid, past closing or in the past"""
    status_code = 400

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"The selected time cannot be booked: {reason}")
