"""
Domain models for slots, bookings and working days.

All times of day are minute-of-day integers (``0`` is midnight, ``1440`` is the
end of the day). Conversion from and to ``HH:MM`` strings lives in
``clinicslots.adapters.clock``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from .exceptions import InvalidInterval, InvalidWorkingDay

MINUTES_PER_DAY = 1440


def _is_minute_value(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, order=True)
class TimeSlot:
    """
    Half-open interval ``[start, end)`` on a single calendar day.

    Invariant: ``0 <= start < end <= 1440``.
    """
    start: int
    end: int

    def __post_init__(self):
        if not (_is_minute_value(self.start) and _is_minute_value(self.end)):
            raise InvalidInterval(
                f"Slot bounds must be integer minutes, got {self.start!r} and {self.end!r}"
            )
        if self.start < 0 or self.end > MINUTES_PER_DAY:
            raise InvalidInterval(
                f"Slot [{self.start}, {self.end}) is outside the day (0-{MINUTES_PER_DAY})"
            )
        if self.start >= self.end:
            raise InvalidInterval(f"Slot start {self.start} must be before end {self.end}")

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def overlaps(self, other: "TimeSlot") -> bool:
        """Check if this slot overlaps with another. Touching endpoints do not."""
        return self.start < other.end and self.end > other.start

    def contains(self, other: "TimeSlot") -> bool:
        """Check if ``other`` lies entirely within this slot."""
        return self.start <= other.start and other.end <= self.end

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"


class BookingStatus(str, Enum):
    """Lifecycle status of an appointment as stored by the booking store."""
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"
    RESCHEDULED = "rescheduled"


@dataclass(frozen=True)
class BookingWindow:
    """
    Read-only projection of a booking record owned by the booking store.
    """
    practitioner_id: str
    date: date
    slot: TimeSlot
    status: BookingStatus
    booking_id: Optional[str] = None

    def __post_init__(self):
        # Accept raw status strings from adapters
        if not isinstance(self.status, BookingStatus):
            object.__setattr__(self, "status", BookingStatus(self.status))


@dataclass(frozen=True)
class WorkingDay:
    """
    Bookable hours and slot granularity of a practitioner on one day.

    A closed day (``is_open=False``) is still validated but produces no slots.
    """
    start_minute: int
    end_minute: int
    slot_granularity_minutes: int
    is_open: bool = True

    def __post_init__(self):
        values = (self.start_minute, self.end_minute, self.slot_granularity_minutes)
        if not all(_is_minute_value(v) for v in values):
            raise InvalidWorkingDay(f"Working day values must be integers, got {values!r}")
        if self.start_minute < 0 or self.end_minute > MINUTES_PER_DAY:
            raise InvalidWorkingDay(
                f"Working hours {self.start_minute}-{self.end_minute} are outside the day"
            )
        if self.end_minute <= self.start_minute:
            raise InvalidWorkingDay(
                f"Working day end {self.end_minute} must be after start {self.start_minute}"
            )
        if self.slot_granularity_minutes <= 0:
            raise InvalidWorkingDay(
                f"Slot granularity must be positive, got {self.slot_granularity_minutes}"
            )

    def bounds(self) -> TimeSlot:
        """Return the bookable window as a slot."""
        return TimeSlot(self.start_minute, self.end_minute)
