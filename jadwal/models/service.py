# jadwal/models/service.py
"""
Service Model - what a business sells
Services are deactivated instead of deleted because appointments reference them.
"""
from sqlalchemy import Column, String, Integer, ForeignKey, Boolean, Text, Uuid
from sqlalchemy.orm import relationship
import uuid
from jadwal.models.base import Base


class Service(Base):
    """
    Stores a bookable service (source of truth for price/duration at booking time).
    """
    __tablename__ = "services"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("businesses.id"),
        nullable=False,
        index=True
    )

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    # Duration in minutes, always > 0
    duration = Column(Integer, nullable=False)

    # Price in IDR (smallest unit, no decimals)
    price = Column(Integer, nullable=False, default=0)

    is_active = Column(Boolean, default=True, nullable=False, index=True)

    business = relationship("Business")

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name}, business_id={self.business_id})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "business_id": str(self.business_id),
            "name": self.name,
            "description": self.description,
            "duration": self.duration,
            "price": self.price,
            "formatted_price": self.formatted_price,
            "formatted_duration": self.formatted_duration,
            "is_active": self.is_active,
        }

    @property
    def formatted_price(self) -> str:
        """Return human-readable price string, e.g. 'Rp 50.000'"""
        if not self.price:
            return "Gratis"
        return "Rp " + f"{self.price:,}".replace(",", ".")

    @property
    def formatted_duration(self) -> str:
        """Return human-readable duration string"""
        hours = self.duration // 60
        minutes = self.duration % 60

        if hours > 0 and minutes > 0:
            return f"{hours}h {minutes}m"
        elif hours > 0:
            return f"{hours}h"
        else:
            return f"{minutes}m"
