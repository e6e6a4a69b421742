"""
Conversion between ``HH:MM`` wall-clock strings and minute-of-day integers.

Only the boundary (config, booking files, CLI) handles strings; the domain
works on integers exclusively.
"""

import re

from ..domain.exceptions import InvalidInterval
from ..domain.models import MINUTES_PER_DAY, BookingWindow, TimeSlot

_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_clock(value: str) -> int:
    """
    Parse a ``H:MM`` or ``HH:MM`` string into minutes since midnight.

    ``"24:00"`` is accepted as the end of the day.

    Raises:
        InvalidInterval: If the string is not a valid time of day
    """
    match = _CLOCK_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidInterval(f"Invalid time of day: {value!r} (expected HH:MM)")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes > 59 or hours * 60 + minutes > MINUTES_PER_DAY:
        raise InvalidInterval(f"Invalid time of day: {value!r}")

    return hours * 60 + minutes


def format_clock(minute_of_day: int) -> str:
    """Format minutes since midnight as ``HH:MM``."""
    if not 0 <= minute_of_day <= MINUTES_PER_DAY:
        raise InvalidInterval(f"Minute of day out of range: {minute_of_day}")
    hours, minutes = divmod(minute_of_day, 60)
    return f"{hours:02d}:{minutes:02d}"


def parse_slot(start: str, end: str) -> TimeSlot:
    """Build a TimeSlot from two ``HH:MM`` strings."""
    return TimeSlot(parse_clock(start), parse_clock(end))


def format_slot(slot: TimeSlot) -> str:
    """Format a slot as ``HH:MM-HH:MM``."""
    return f"{format_clock(slot.start)}-{format_clock(slot.end)}"


def format_booking(booking: BookingWindow) -> str:
    """Format a booking as ``APT000042 10:00-10:30 (confirmed)`` for messages."""
    label = booking.booking_id or "-"
    return f"{label} {format_slot(booking.slot)} ({booking.status.value})"
