"""
Pydantic schemas for the public booking flow and appointment lifecycle
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import date as Date, datetime
from uuid import UUID

from jadwal.models.appointment import AppointmentStatus

HHMM_PATTERN = r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$"


class CamelModel(BaseModel):
    """Accepts camelCase keys from the web client and snake_case from Python callers"""
    model_config = ConfigDict(populate_by_name=True)


# ============================================================================
# Request Schemas
# ============================================================================

class BookingCreate(CamelModel):
    """Customer booking from the public page"""
    service_id: UUID = Field(..., alias="serviceId")
    staff_id: Optional[UUID] = Field(None, alias="staffId")
    date: Date
    time: str = Field(..., pattern=HHMM_PATTERN)
    customer_name: str = Field(..., alias="customerName", min_length=2, max_length=200)
    customer_phone: str = Field(..., alias="customerPhone", min_length=10, max_length=20, pattern=r"^[0-9+]+$")
    notes: Optional[str] = Field(None, max_length=1000)


class StatusUpdate(BaseModel):
    status: AppointmentStatus


class RescheduleRequest(CamelModel):
    reason: str = Field(..., min_length=5, max_length=1000)
    preferred_date: Optional[Date] = Field(None, alias="preferredDate")
    preferred_time: Optional[str] = Field(None, alias="preferredTime", pattern=HHMM_PATTERN)


class SuggestSlotRequest(CamelModel):
    suggested_slot: datetime = Field(..., alias="suggestedSlot")
    message: Optional[str] = Field(None, max_length=1000)


class ConfirmRescheduleRequest(CamelModel):
    new_start_time: datetime = Field(..., alias="newStartTime")
    new_end_time: datetime = Field(..., alias="newEndTime")


# ============================================================================
# Response Schemas
# ============================================================================

class Slot(BaseModel):
    """One candidate start time, business local time"""
    time: str
    available: bool


class SlotsResponse(BaseModel):
    slots: List[Slot]
