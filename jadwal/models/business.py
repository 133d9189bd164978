# jadwal/models/business.py
"""
Business (tenant) and its weekly operating hours
"""
from sqlalchemy import Column, String, Boolean, DateTime, Text, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
import uuid
from jadwal.models.base import Base


class SubscriptionTier(str, enum.Enum):
    FREE = "free"
    PRO = "pro"
    BUSINESS = "business"


class BusinessCategory(str, enum.Enum):
    BARBERSHOP = "barbershop"
    SALON = "salon"
    DENTAL = "dental"
    SPA = "spa"
    GYM = "gym"
    AUTO = "auto"
    TUTOR = "tutor"
    PHOTO = "photo"
    LAUNDRY = "laundry"
    OTHER = "other"


class DayOfWeek(str, enum.Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_date(cls, day) -> "DayOfWeek":
        """Python's weekday() is 0=Monday, same order as the members"""
        return list(cls)[day.weekday()]


class Business(Base):
    __tablename__ = "businesses"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    category = Column(String(50), nullable=False, default=BusinessCategory.OTHER.value)
    description = Column(Text, nullable=True)

    # Owner / contact
    owner_name = Column(String(200), nullable=False)
    owner_email = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)

    subscription_tier = Column(String(20), nullable=False, default=SubscriptionTier.FREE.value)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, server_default=func.now())

    operating_hours = relationship(
        "OperatingHours",
        back_populates="business",
        order_by="OperatingHours.id",
    )

    def __repr__(self):
        return f"<Business(id={self.id}, slug={self.slug})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "name": self.name,
            "slug": self.slug,
            "category": self.category,
            "description": self.description,
            "owner_name": self.owner_name,
            "phone": self.phone,
            "address": self.address,
            "subscription_tier": self.subscription_tier,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class OperatingHours(Base):
    __tablename__ = "operating_hours"
    __table_args__ = (
        UniqueConstraint("business_id", "day_of_week", name="uq_operating_hours_business_day"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid(as_uuid=True), ForeignKey("businesses.id"), nullable=False, index=True)
    day_of_week = Column(String(10), nullable=False)  # monday..sunday
    open_time = Column(String(5), nullable=False)  # HH:MM format
    close_time = Column(String(5), nullable=False)  # HH:MM format
    is_closed = Column(Boolean, default=False, nullable=False)

    business = relationship("Business", back_populates="operating_hours")

    def __repr__(self):
        return f"<OperatingHours(business_id={self.business_id}, day={self.day_of_week})>"

    def to_dict(self):
        return {
            "day_of_week": self.day_of_week,
            "open_time": self.open_time,
            "close_time": self.close_time,
            "is_closed": self.is_closed,
        }
