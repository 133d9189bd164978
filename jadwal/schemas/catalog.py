"""
Pydantic schemas for dashboard management: onboarding, services, staff, hours
"""
from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from typing import Optional, List

from jadwal.models.business import BusinessCategory, DayOfWeek
from jadwal.schemas.booking import CamelModel, HHMM_PATTERN
from jadwal.utils.clock import to_minutes


# ============================================================================
# Onboarding
# ============================================================================

class BusinessRegistration(CamelModel):
    name: str = Field(..., min_length=2, max_length=200)
    slug: str = Field(..., min_length=3, max_length=100, pattern=r"^[a-z0-9-]+$")
    category: BusinessCategory
    owner_name: str = Field(..., alias="ownerName", min_length=2)
    owner_email: EmailStr = Field(..., alias="ownerEmail")
    phone: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None


class BusinessUpdate(CamelModel):
    """Profile fields an owner may edit. The slug is the public link and stays fixed."""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=2, max_length=200)
    category: Optional[BusinessCategory] = None
    owner_name: Optional[str] = Field(None, alias="ownerName", min_length=2)
    phone: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None


class OnboardingHours(CamelModel):
    open_time: str = Field("09:00", alias="openTime", pattern=HHMM_PATTERN)
    close_time: str = Field("17:00", alias="closeTime", pattern=HHMM_PATTERN)
    work_days: List[DayOfWeek] = Field(
        default_factory=lambda: [d for d in DayOfWeek if d != DayOfWeek.SUNDAY],
        alias="workDays"
    )


class OnboardingRequest(CamelModel):
    business: BusinessRegistration
    operating_hours: OnboardingHours = Field(default_factory=OnboardingHours, alias="operatingHours")


# ============================================================================
# Services
# ============================================================================

class ServiceCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=200)
    description: Optional[str] = None
    duration: int = Field(..., ge=15, le=480, description="Duration in minutes")
    price: int = Field(..., ge=0, description="Price in IDR")


class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=200)
    description: Optional[str] = None
    duration: Optional[int] = Field(None, ge=15, le=480)
    price: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


# ============================================================================
# Staff
# ============================================================================

class StaffCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None


class StaffUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None


# ============================================================================
# Operating hours
# ============================================================================

class OperatingHoursEntry(CamelModel):
    day_of_week: DayOfWeek = Field(..., alias="dayOfWeek")
    open_time: str = Field(..., alias="openTime", pattern=HHMM_PATTERN)
    close_time: str = Field(..., alias="closeTime", pattern=HHMM_PATTERN)
    is_closed: bool = Field(False, alias="isClosed")

    @model_validator(mode="after")
    def close_after_open(self):
        if not self.is_closed and to_minutes(self.close_time) <= to_minutes(self.open_time):
            raise ValueError("Closing time must be after opening time")
        return self


class OperatingHoursBulkUpdate(CamelModel):
    hours: List[OperatingHoursEntry] = Field(..., min_length=1)
    apply_to_all: bool = Field(False, alias="applyToAll")
