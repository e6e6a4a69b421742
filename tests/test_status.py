"""
Tests for status-aware booking filtering.
"""

import pendulum
import pytest

from clinicslots.domain.models import BookingStatus, BookingWindow, TimeSlot
from clinicslots.domain.status import (
    OCCUPYING_STATUSES,
    TERMINAL_STATUSES,
    is_occupying,
    occupying,
    partition,
)

DAY = pendulum.date(2024, 11, 25)


def _booking(booking_id: str, status: str, start: int = 600) -> BookingWindow:
    return BookingWindow(
        practitioner_id="doc-1",
        date=DAY,
        slot=TimeSlot(start, start + 30),
        status=status,
        booking_id=booking_id,
    )


class TestIsOccupying:
    """Tests for the occupying-status membership test."""

    @pytest.mark.parametrize("status", ["scheduled", "confirmed", "in-progress", "rescheduled"])
    def test_occupying_statuses(self, status):
        assert is_occupying(status)
        assert is_occupying(BookingStatus(status))

    @pytest.mark.parametrize("status", ["completed", "cancelled", "no-show"])
    def test_terminal_statuses(self, status):
        assert not is_occupying(status)

    def test_status_sets_cover_every_status(self):
        """Every status is either occupying or terminal, never both."""
        assert OCCUPYING_STATUSES | TERMINAL_STATUSES == set(BookingStatus)
        assert not OCCUPYING_STATUSES & TERMINAL_STATUSES

    def test_unknown_status_raises(self):
        with pytest.raises(ValueError):
            is_occupying("postponed")


class TestPartition:
    """Tests for partition() and occupying()."""

    def test_partition_preserves_order(self):
        """Each group keeps the relative input order."""
        bookings = [
            _booking("a", "cancelled"),
            _booking("b", "scheduled"),
            _booking("c", "completed"),
            _booking("d", "rescheduled"),
            _booking("e", "no-show"),
            _booking("f", "confirmed"),
        ]

        result = partition(bookings)

        assert [b.booking_id for b in result.occupying] == ["b", "d", "f"]
        assert [b.booking_id for b in result.terminal] == ["a", "c", "e"]

    def test_partition_is_total(self):
        """Every booking ends up in exactly one group."""
        statuses = [s.value for s in BookingStatus] * 3
        bookings = [_booking(str(i), status) for i, status in enumerate(statuses)]

        result = partition(bookings)

        assert len(result.occupying) + len(result.terminal) == len(bookings)

    def test_partition_empty(self):
        result = partition([])

        assert result.occupying == []
        assert result.terminal == []

    def test_occupying_accepts_generators(self):
        """occupying() works on one-shot iterables."""
        bookings = (b for b in [_booking("a", "cancelled"), _booking("b", "in-progress")])

        assert [b.booking_id for b in occupying(bookings)] == ["b"]
