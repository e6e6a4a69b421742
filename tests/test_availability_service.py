"""
Tests for the AvailabilityService orchestration layer.
"""

import logging
from datetime import date
from typing import Dict, List, Tuple

import pendulum
import pytest

from clinicslots.config import AppConfig
from clinicslots.domain.models import BookingWindow, TimeSlot, WorkingDay
from clinicslots.services.availability import AvailabilityService

MONDAY = pendulum.date(2024, 11, 25)
SUNDAY = pendulum.date(2024, 12, 1)


class StubBookingStore:
    """Minimal stub matching BookingStoreProtocol."""

    def __init__(self, bookings: List[BookingWindow]):
        self._bookings = bookings
        self.calls: List[Tuple[str, date]] = []

    def get_bookings(self, practitioner_id, day):
        self.calls.append((practitioner_id, day))
        return [b for b in self._bookings if b.practitioner_id == practitioner_id and b.date == day]


def _booking(start, end, status="scheduled", booking_id=None):
    return BookingWindow(
        practitioner_id="doc-1",
        date=MONDAY,
        slot=TimeSlot(start, end),
        status=status,
        booking_id=booking_id,
    )


def _build_service(bookings: List[BookingWindow], config: AppConfig | None = None) -> AvailabilityService:
    return AvailabilityService(booking_store=StubBookingStore(bookings), config=config)


def test_check_availability_queries_store():
    """The store is asked for the practitioner's day."""
    store = StubBookingStore([_booking(600, 630, booking_id="APT000001")])
    service = AvailabilityService(booking_store=store)

    result = service.check_availability(TimeSlot(615, 645), "doc-1", MONDAY)

    assert store.calls == [("doc-1", MONDAY)]
    assert not result.available
    assert [b.booking_id for b in result.conflicting_windows] == ["APT000001"]


def test_check_availability_logs_clock_times(caplog):
    """Log lines show HH:MM rather than minute counts."""
    service = _build_service([_booking(600, 630, booking_id="APT000001")])

    with caplog.at_level(logging.DEBUG, logger="clinicslots.services.availability"):
        service.check_availability(TimeSlot(615, 645), "doc-1", MONDAY)

    assert "10:15-10:45" in caplog.text
    assert "taken" in caplog.text
    assert "APT000001 10:00-10:30 (scheduled)" in caplog.text
    assert "[615, 645)" not in caplog.text


def test_check_availability_excluding_own_booking():
    service = _build_service([_booking(600, 630, booking_id="APT000001")])

    result = service.check_availability(
        TimeSlot(615, 645), "doc-1", MONDAY, exclude_booking_id="APT000001"
    )

    assert result.available


def test_list_free_slots_with_explicit_working_day():
    service = _build_service([_booking(600, 630), _booking(630, 660, status="cancelled")])

    slots = service.list_free_slots(WorkingDay(540, 720, 30), "doc-1", MONDAY)

    assert [s.start for s in slots] == [540, 570, 630, 660, 690]


def test_list_free_slots_uses_config_hours():
    """Without a working day the configured clinic hours apply."""
    service = _build_service([], config=AppConfig())

    slots = service.list_free_slots(None, "doc-1", MONDAY)

    assert len(slots) == 18  # 09:00-18:00 in 30-minute slots
    assert service.list_free_slots(None, "doc-1", SUNDAY) == []


def test_list_free_slots_without_config_requires_working_day():
    service = _build_service([])

    with pytest.raises(ValueError, match="working day is required"):
        service.list_free_slots(None, "doc-1", MONDAY)


def test_day_summary():
    service = _build_service([
        _booking(540, 600),
        _booking(600, 660, status="completed"),
        _booking(660, 690, status="no-show"),
    ])

    summary = service.day_summary("doc-1", MONDAY, WorkingDay(540, 720, 30))

    assert summary.occupying_count == 1
    assert summary.terminal_count == 2
    assert len(summary.free_slots) == 4
    assert not summary.fully_booked


def test_is_fully_booked():
    service = _build_service([_booking(540, 720, status="confirmed")])

    assert service.is_fully_booked("doc-1", MONDAY, WorkingDay(540, 720, 30))
    assert not service.is_fully_booked("doc-1", MONDAY, WorkingDay(720, 780, 30))


def test_closed_day_is_not_fully_booked():
    service = _build_service([], config=AppConfig())

    assert not service.is_fully_booked("doc-1", SUNDAY)
