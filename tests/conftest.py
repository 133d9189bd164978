import os

# Settings and the module-level engine are built on first import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["NOTIFICATIONS_ENABLED"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"

import json
from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jadwal.api.dependencies import ROLE_ADMIN, ROLE_BUSINESS, create_access_token
from jadwal.config.database import get_db
from jadwal.main import app
from jadwal.models import (
    Appointment,
    AppointmentStatus,
    Base,
    Business,
    DayOfWeek,
    OperatingHours,
    Service,
    Staff,
)
from jadwal.services.notification.notification_service import NotificationService, get_notifier

# 2030-01-07 is a Monday, far enough ahead that no candidate is in the past
MONDAY = date(2030, 1, 7)
SUNDAY = date(2030, 1, 6)


class RecordingPublisher:
    """Stands in for Redis pub/sub, keeps every published message"""

    def __init__(self):
        self.messages = []

    async def __call__(self, channel, message):
        self.messages.append((channel, json.loads(message)))
        return 1

    def event_types(self, channel=None):
        return [
            payload["payload"]["type"]
            for published_channel, payload in self.messages
            if channel is None or published_channel == channel
        ]


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def notifier(publisher):
    return NotificationService(publisher=publisher, enabled=True)


# ============================================================================
# Factories
# ============================================================================

@pytest.fixture
def make_business(db):
    def _make(
            slug="barber-king",
            tier="free",
            open_time="09:00",
            close_time="17:00",
            closed_days=("sunday",)
    ):
        business = Business(
            name=f"Business {slug}",
            slug=slug,
            category="barbershop",
            owner_name="Budi Santoso",
            owner_email="budi@example.com",
            subscription_tier=tier,
            is_active=True,
        )
        db.add(business)
        db.flush()
        for day in DayOfWeek:
            db.add(OperatingHours(
                business_id=business.id,
                day_of_week=day.value,
                open_time=open_time,
                close_time=close_time,
                is_closed=day.value in closed_days,
            ))
        db.commit()
        db.refresh(business)
        return business
    return _make


@pytest.fixture
def make_service(db):
    def _make(business, name="Gentlemen Cut", duration=45, price=50000, is_active=True):
        service = Service(
            business_id=business.id,
            name=name,
            duration=duration,
            price=price,
            is_active=is_active,
        )
        db.add(service)
        db.commit()
        db.refresh(service)
        return service
    return _make


@pytest.fixture
def make_staff(db):
    def _make(business, name="Andi", is_active=True):
        member = Staff(business_id=business.id, name=name, is_active=is_active)
        db.add(member)
        db.commit()
        db.refresh(member)
        return member
    return _make


@pytest.fixture
def make_appointment(db):
    def _make(business, service, staff, start_time, status=AppointmentStatus.PENDING.value):
        appointment = Appointment(
            business_id=business.id,
            service_id=service.id,
            staff_id=staff.id,
            customer_name="Siti",
            customer_phone="081234567890",
            start_time=start_time,
            end_time=start_time + timedelta(minutes=service.duration),
            status=status,
            total_price=service.price,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment
    return _make


@pytest.fixture
def business(make_business):
    return make_business()


@pytest.fixture
def service(make_service, business):
    return make_service(business)


@pytest.fixture
def staff(make_staff, business):
    return make_staff(business)


@pytest.fixture
def at():
    """Wall-clock datetime on the test Monday"""
    def _at(hhmm):
        hours, minutes = hhmm.split(":")
        return datetime.combine(MONDAY, datetime.min.time()).replace(hour=int(hours), minute=int(minutes))
    return _at


# ============================================================================
# HTTP
# ============================================================================

@pytest.fixture
def client(db, notifier):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def bearer(claims):
    return {"Authorization": f"Bearer {create_access_token(claims)}"}


@pytest.fixture
def owner_headers(business):
    return bearer({"sub": "owner-1", "role": ROLE_BUSINESS, "business_id": str(business.id)})


@pytest.fixture
def admin_headers():
    return bearer({"sub": "admin-1", "role": ROLE_ADMIN})


@pytest.fixture
def stranger_headers():
    return bearer({
        "sub": "owner-2",
        "role": ROLE_BUSINESS,
        "business_id": "00000000-0000-0000-0000-000000000001",
    })
