from datetime import date, datetime, timedelta
from uuid import uuid4

from jadwal.models import AppointmentStatus
from jadwal.services.availability.availability_service import (
    AvailabilityService,
    generate_candidate_starts,
    intervals_overlap,
)

MONDAY = date(2030, 1, 7)
SUNDAY = date(2030, 1, 6)
START_OF_MONDAY = datetime(2030, 1, 7, 0, 0)


def available_times(slots):
    return [slot["time"] for slot in slots if slot["available"]]


def unavailable_times(slots):
    return [slot["time"] for slot in slots if not slot["available"]]


def test_candidates_follow_fixed_cadence():
    starts = generate_candidate_starts(MONDAY, "09:00", "17:00", 45, 30)

    assert len(starts) == 15
    assert starts[0] == datetime(2030, 1, 7, 9, 0)
    assert starts[-1] == datetime(2030, 1, 7, 16, 0)
    assert all(b - a == timedelta(minutes=30) for a, b in zip(starts, starts[1:]))


def test_candidates_empty_when_service_longer_than_day():
    assert generate_candidate_starts(MONDAY, "09:00", "10:00", 90, 30) == []


def test_intervals_overlap_is_half_open():
    nine = datetime(2030, 1, 7, 9, 0)
    ten = datetime(2030, 1, 7, 10, 0)
    eleven = datetime(2030, 1, 7, 11, 0)

    assert not intervals_overlap(nine, ten, ten, eleven)
    assert intervals_overlap(nine, ten + timedelta(minutes=1), ten, eleven)


def test_open_day_lists_every_candidate(db, business, service, staff):
    slots = AvailabilityService.get_available_slots(
        db, business.id, MONDAY, service.id, now=START_OF_MONDAY
    )

    assert [slot["time"] for slot in slots] == [
        "09:00", "09:30", "10:00", "10:30", "11:00", "11:30", "12:00", "12:30",
        "13:00", "13:30", "14:00", "14:30", "15:00", "15:30", "16:00",
    ]
    assert all(slot["available"] for slot in slots)


def test_same_inputs_give_same_slots(db, business, service, staff):
    first = AvailabilityService.get_available_slots(db, business.id, MONDAY, service.id, now=START_OF_MONDAY)
    second = AvailabilityService.get_available_slots(db, business.id, MONDAY, service.id, now=START_OF_MONDAY)

    assert first == second


def test_closed_day_has_no_slots(db, business, service, staff):
    assert AvailabilityService.get_available_slots(db, business.id, SUNDAY, service.id) == []


def test_unknown_service_has_no_slots(db, business, staff):
    assert AvailabilityService.get_available_slots(db, business.id, MONDAY, uuid4()) == []


def test_service_of_another_business_has_no_slots(db, make_business, make_service, business, staff):
    other = make_business(slug="salon-cantik")
    foreign_service = make_service(other)

    assert AvailabilityService.get_available_slots(db, business.id, MONDAY, foreign_service.id) == []


def test_existing_appointment_blocks_overlapping_candidates(
        db, business, service, staff, make_appointment, at
):
    make_appointment(business, service, staff, at("10:00"))

    slots = AvailabilityService.get_available_slots(
        db, business.id, MONDAY, service.id, staff_id=staff.id, now=START_OF_MONDAY
    )

    # 10:00-10:45 is taken; a 45 minute service starting 09:30 or 10:30 would overlap it
    assert unavailable_times(slots) == ["09:30", "10:00", "10:30"]
    assert "09:00" in available_times(slots)
    assert "11:00" in available_times(slots)


def test_cancelled_appointment_does_not_block(db, business, service, staff, make_appointment, at):
    make_appointment(business, service, staff, at("10:00"), status=AppointmentStatus.CANCELLED.value)

    slots = AvailabilityService.get_available_slots(db, business.id, MONDAY, service.id, now=START_OF_MONDAY)

    assert unavailable_times(slots) == []


def test_appointment_on_another_day_does_not_block(db, business, service, staff, make_appointment, at):
    make_appointment(business, service, staff, at("10:00") + timedelta(days=1))

    slots = AvailabilityService.get_available_slots(db, business.id, MONDAY, service.id, now=START_OF_MONDAY)

    assert unavailable_times(slots) == []


def test_candidates_before_now_are_unavailable(db, business, service, staff):
    now = datetime(2030, 1, 7, 14, 0)

    slots = AvailabilityService.get_available_slots(db, business.id, MONDAY, service.id, now=now)

    assert available_times(slots) == ["14:00", "14:30", "15:00", "15:30", "16:00"]
    assert len(unavailable_times(slots)) == 10


def test_any_staff_is_free_when_one_member_is(
        db, business, service, make_staff, make_appointment, at
):
    andi = make_staff(business, name="Andi")
    make_staff(business, name="Budi")
    make_appointment(business, service, andi, at("10:00"))

    any_staff = AvailabilityService.get_available_slots(
        db, business.id, MONDAY, service.id, now=START_OF_MONDAY
    )
    only_andi = AvailabilityService.get_available_slots(
        db, business.id, MONDAY, service.id, staff_id=andi.id, now=START_OF_MONDAY
    )

    assert unavailable_times(any_staff) == []
    assert "10:00" in unavailable_times(only_andi)


def test_slot_unavailable_when_every_member_is_busy(
        db, business, service, make_staff, make_appointment, at
):
    andi = make_staff(business, name="Andi")
    budi = make_staff(business, name="Budi")
    make_appointment(business, service, andi, at("10:00"))
    make_appointment(business, service, budi, at("10:00"))

    slots = AvailabilityService.get_available_slots(db, business.id, MONDAY, service.id, now=START_OF_MONDAY)

    assert unavailable_times(slots) == ["09:30", "10:00", "10:30"]


def test_inactive_staff_does_not_make_slots_available(
        db, business, service, make_staff, make_appointment, at
):
    andi = make_staff(business, name="Andi")
    make_staff(business, name="Budi", is_active=False)
    make_appointment(business, service, andi, at("10:00"))

    slots = AvailabilityService.get_available_slots(db, business.id, MONDAY, service.id, now=START_OF_MONDAY)

    assert "10:00" in unavailable_times(slots)


def test_other_staff_appointments_ignored_for_chosen_staff(
        db, business, service, make_staff, make_appointment, at
):
    andi = make_staff(business, name="Andi")
    budi = make_staff(business, name="Budi")
    make_appointment(business, service, andi, at("10:00"))

    slots = AvailabilityService.get_available_slots(
        db, business.id, MONDAY, service.id, staff_id=budi.id, now=START_OF_MONDAY
    )

    assert unavailable_times(slots) == []


def test_empty_roster_makes_every_slot_unavailable(db, business, service):
    slots = AvailabilityService.get_available_slots(db, business.id, MONDAY, service.id, now=START_OF_MONDAY)

    assert len(slots) == 15
    assert available_times(slots) == []


def test_off_cadence_interval_against_existing_appointment():
    booked = (datetime(2030, 1, 7, 10, 0), datetime(2030, 1, 7, 10, 45))

    assert intervals_overlap(datetime(2030, 1, 7, 9, 45), datetime(2030, 1, 7, 10, 30), *booked)
    assert not intervals_overlap(datetime(2030, 1, 7, 11, 0), datetime(2030, 1, 7, 11, 45), *booked)


def test_inactive_chosen_staff_has_no_slots(db, business, service, make_staff):
    resting = make_staff(business, name="Budi", is_active=False)

    slots = AvailabilityService.get_available_slots(
        db, business.id, MONDAY, service.id, staff_id=resting.id, now=START_OF_MONDAY
    )

    assert slots == []


def test_staff_of_another_business_has_no_slots(db, business, service, staff, make_business, make_staff):
    other = make_business(slug="salon-cantik")
    outsider = make_staff(other, name="Citra")

    slots = AvailabilityService.get_available_slots(
        db, business.id, MONDAY, service.id, staff_id=outsider.id, now=START_OF_MONDAY
    )

    assert slots == []


def test_unknown_chosen_staff_has_no_slots(db, business, service, staff):
    slots = AvailabilityService.get_available_slots(
        db, business.id, MONDAY, service.id, staff_id=uuid4(), now=START_OF_MONDAY
    )

    assert slots == []
