# jadwal/models/customer.py
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.sql import func
import uuid
from jadwal.models.base import Base


class Customer(Base):
    __tablename__ = "customers"
    __table_args__ = (
        # Phone (WhatsApp number) identifies a customer within one business only
        UniqueConstraint("business_id", "phone", name="uq_customers_business_phone"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid(as_uuid=True), ForeignKey("businesses.id"), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    phone = Column(String(20), nullable=False)
    email = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<Customer(id={self.id}, phone={self.phone})>"
