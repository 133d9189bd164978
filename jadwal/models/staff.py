# jadwal/models/staff.py
from sqlalchemy import Column, String, Boolean, ForeignKey, Uuid
import uuid
from jadwal.models.base import Base


class Staff(Base):
    """A member of the business roster. Deactivated, never deleted."""
    __tablename__ = "staff"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid(as_uuid=True), ForeignKey("businesses.id"), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    avatar_url = Column(String, nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Staff(id={self.id}, name={self.name})>"

    def to_dict(self):
        return {
            "id": str(self.id),
            "business_id": str(self.business_id),
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "avatar_url": self.avatar_url,
            "is_active": self.is_active,
        }
