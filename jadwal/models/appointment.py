# jadwal/models/appointment.py
from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
import uuid
from jadwal.models.base import Base


class AppointmentStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


TERMINAL_STATUSES = frozenset({AppointmentStatus.COMPLETED.value, AppointmentStatus.CANCELLED.value})


class PaymentStatus(str, enum.Enum):
    UNPAID = "unpaid"
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"
    FAILED = "failed"


class RescheduleState(str, enum.Enum):
    NONE = "none"
    REQUESTED = "requested"
    SUGGESTED = "suggested"


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        Index("ix_appointments_business_start", "business_id", "start_time"),
        Index("ix_appointments_staff_start", "staff_id", "start_time"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # References (immutable once created)
    business_id = Column(Uuid(as_uuid=True), ForeignKey("businesses.id"), nullable=False)
    service_id = Column(Uuid(as_uuid=True), ForeignKey("services.id"), nullable=False)
    staff_id = Column(Uuid(as_uuid=True), ForeignKey("staff.id"), nullable=False)
    customer_id = Column(Uuid(as_uuid=True), ForeignKey("customers.id"), nullable=True)

    # Customer info
    customer_name = Column(String(200), nullable=False)
    customer_phone = Column(String(20), nullable=False)

    # Business-local wall-clock times; end_time is fixed at booking
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    notes = Column(Text, nullable=True)

    # Status tracking
    status = Column(String(20), nullable=False, default=AppointmentStatus.PENDING.value)

    # Price snapshot in IDR
    total_price = Column(Integer, nullable=False)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.UNPAID.value)

    # Reschedule negotiation
    reschedule_requested_at = Column(DateTime, nullable=True)
    reschedule_reason = Column(Text, nullable=True)
    suggested_slot = Column(DateTime, nullable=True)
    suggested_slot_message = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    service = relationship("Service")
    staff = relationship("Staff")

    def __repr__(self):
        return f"<Appointment(id={self.id}, status={self.status}, start={self.start_time})>"

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def reschedule_state(self) -> RescheduleState:
        if self.suggested_slot is not None:
            return RescheduleState.SUGGESTED
        if self.reschedule_requested_at is not None:
            return RescheduleState.REQUESTED
        return RescheduleState.NONE

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "business_id": str(self.business_id),
            "service_id": str(self.service_id),
            "staff_id": str(self.staff_id),
            "customer_id": str(self.customer_id) if self.customer_id else None,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "status": self.status,
            "notes": self.notes,
            "total_price": self.total_price,
            "payment_status": self.payment_status,
            "reschedule_state": self.reschedule_state.value,
            "reschedule_requested_at": (
                self.reschedule_requested_at.isoformat() if self.reschedule_requested_at else None
            ),
            "reschedule_reason": self.reschedule_reason,
            "suggested_slot": self.suggested_slot.isoformat() if self.suggested_slot else None,
            "suggested_slot_message": self.suggested_slot_message,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
