"""
Tests for domain models.
"""

import itertools

import pendulum
import pytest

from clinicslots.domain.exceptions import InvalidInterval, InvalidWorkingDay
from clinicslots.domain.models import BookingStatus, BookingWindow, TimeSlot, WorkingDay


class TestTimeSlot:
    """Tests for TimeSlot model."""

    def test_create_valid_slot(self):
        """Bounds are stored exactly as given."""
        slot = TimeSlot(540, 600)

        assert slot.start == 540
        assert slot.end == 600
        assert slot.duration_minutes() == 60

    @pytest.mark.parametrize("start,end", [(0, 1), (0, 1440), (1439, 1440), (575, 583)])
    def test_no_clamping(self, start, end):
        """Valid bounds are read back unchanged, including the day edges."""
        slot = TimeSlot(start, end)

        assert (slot.start, slot.end) == (start, end)

    @pytest.mark.parametrize("start,end", [(600, 540), (600, 600), (-1, 60), (1400, 1441)])
    def test_invalid_slot_raises_error(self, start, end):
        """Reversed, empty and out-of-day slots are rejected."""
        with pytest.raises(InvalidInterval):
            TimeSlot(start, end)

    def test_non_integer_bounds_rejected(self):
        """Wall-clock strings and booleans are not minute values."""
        with pytest.raises(InvalidInterval):
            TimeSlot("09:00", "10:00")
        with pytest.raises(InvalidInterval):
            TimeSlot(False, 60)

    def test_invalid_interval_is_value_error(self):
        """Callers catching ValueError also catch InvalidInterval."""
        with pytest.raises(ValueError, match="must be before end"):
            TimeSlot(600, 540)

    def test_overlaps(self):
        """Test overlap detection."""
        morning = TimeSlot(540, 720)
        late_morning = TimeSlot(660, 840)
        afternoon = TimeSlot(840, 1020)

        assert morning.overlaps(late_morning)
        assert late_morning.overlaps(morning)
        assert not morning.overlaps(afternoon)

    def test_adjacent_slots_do_not_overlap(self):
        """Back-to-back slots share an endpoint but do not overlap."""
        assert not TimeSlot(540, 600).overlaps(TimeSlot(600, 660))
        assert not TimeSlot(600, 660).overlaps(TimeSlot(540, 600))

    def test_containing_slot_overlaps(self):
        """A slot overlaps any slot it contains."""
        outer = TimeSlot(540, 720)
        inner = TimeSlot(600, 630)

        assert outer.overlaps(inner)
        assert outer.contains(inner)
        assert not inner.contains(outer)

    def test_overlap_is_symmetric(self):
        """a.overlaps(b) == b.overlaps(a) over a grid of slots."""
        bounds = range(0, 181, 30)
        slots = [TimeSlot(s, e) for s, e in itertools.combinations(bounds, 2)]

        for a, b in itertools.product(slots, repeat=2):
            assert a.overlaps(b) == b.overlaps(a)

    def test_slots_sort_by_start(self):
        """Slots order by start, then end."""
        slots = [TimeSlot(600, 660), TimeSlot(540, 600), TimeSlot(540, 570)]

        assert sorted(slots) == [TimeSlot(540, 570), TimeSlot(540, 600), TimeSlot(600, 660)]


class TestBookingWindow:
    """Tests for BookingWindow model."""

    def test_status_string_is_coerced(self):
        """Adapters may pass raw status strings."""
        booking = BookingWindow(
            practitioner_id="doc-1",
            date=pendulum.date(2024, 11, 25),
            slot=TimeSlot(600, 630),
            status="in-progress",
        )

        assert booking.status is BookingStatus.IN_PROGRESS

    def test_unknown_status_raises(self):
        """Statuses outside the lifecycle are rejected."""
        with pytest.raises(ValueError):
            BookingWindow(
                practitioner_id="doc-1",
                date=pendulum.date(2024, 11, 25),
                slot=TimeSlot(600, 630),
                status="postponed",
            )


class TestWorkingDay:
    """Tests for WorkingDay model."""

    def test_valid_working_day(self):
        day = WorkingDay(540, 1080, 30)

        assert day.is_open
        assert day.bounds() == TimeSlot(540, 1080)

    @pytest.mark.parametrize(
        "start,end,granularity",
        [(1080, 540, 30), (540, 540, 30), (540, 1080, 0), (540, 1080, -15), (-30, 600, 30), (540, 1500, 30)],
    )
    def test_invalid_working_day_raises(self, start, end, granularity):
        """Reversed hours and non-positive granularity are rejected."""
        with pytest.raises(InvalidWorkingDay):
            WorkingDay(start, end, granularity)

    def test_closed_day_is_still_validated(self):
        """A closed day must still describe a valid window."""
        with pytest.raises(InvalidWorkingDay):
            WorkingDay(600, 540, 30, is_open=False)
