"""
Conflict predicate for a candidate appointment slot.

Pure query over caller-supplied bookings; no storage access happens here.
The result is advisory. The booking store must re-check and insert within one
atomic operation to prevent double-booking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

from .models import BookingWindow, TimeSlot
from .status import is_occupying


@dataclass
class AvailabilityResult:
    """Outcome of a conflict check."""
    available: bool
    conflicting_windows: List[BookingWindow] = field(default_factory=list)


def check_conflict(
    candidate: TimeSlot,
    practitioner_id: str,
    day: date,
    bookings: Iterable[BookingWindow],
    exclude_booking_id: Optional[str] = None,
) -> AvailabilityResult:
    """
    Decide whether ``candidate`` is bookable for a practitioner on a day.

    Args:
        candidate: Proposed slot
        practitioner_id: Practitioner the slot is proposed for
        day: Calendar day of the slot
        bookings: Existing bookings, normally already narrowed to the
            practitioner and day by the booking store
        exclude_booking_id: Booking to ignore, e.g. the appointment that is
            being moved

    Returns:
        AvailabilityResult listing every occupying booking that overlaps the
        candidate, in input order
    """
    conflicts: List[BookingWindow] = []

    for booking in bookings:
        if booking.practitioner_id != practitioner_id or booking.date != day:
            continue
        if exclude_booking_id is not None and booking.booking_id == exclude_booking_id:
            continue
        if not is_occupying(booking.status):
            continue
        if candidate.overlaps(booking.slot):
            conflicts.append(booking)

    return AvailabilityResult(available=not conflicts, conflicting_windows=conflicts)
