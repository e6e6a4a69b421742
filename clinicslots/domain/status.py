"""
Status-aware filtering of bookings.

Only occupying bookings block a slot. The status transitions themselves
(``scheduled -> confirmed -> in-progress -> completed``, cancellations,
no-shows and reschedules) are enforced by the booking store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, List, Union

from .models import BookingStatus, BookingWindow

OCCUPYING_STATUSES: FrozenSet[BookingStatus] = frozenset({
    BookingStatus.SCHEDULED,
    BookingStatus.CONFIRMED,
    BookingStatus.IN_PROGRESS,
    # Keeps its original slot until the store books the new one
    BookingStatus.RESCHEDULED,
})

TERMINAL_STATUSES: FrozenSet[BookingStatus] = frozenset({
    BookingStatus.COMPLETED,
    BookingStatus.CANCELLED,
    BookingStatus.NO_SHOW,
})


@dataclass
class BookingPartition:
    """Bookings split into occupying and terminal groups."""
    occupying: List[BookingWindow] = field(default_factory=list)
    terminal: List[BookingWindow] = field(default_factory=list)


def is_occupying(status: Union[BookingStatus, str]) -> bool:
    """Return True if a booking with this status still reserves its slot."""
    return BookingStatus(status) in OCCUPYING_STATUSES


def occupying(bookings: Iterable[BookingWindow]) -> Iterator[BookingWindow]:
    """Yield the occupying bookings, preserving input order."""
    return (booking for booking in bookings if is_occupying(booking.status))


def partition(bookings: Iterable[BookingWindow]) -> BookingPartition:
    """
    Split bookings into occupying and terminal groups.

    The split is total and keeps the relative input order within each group.
    """
    result = BookingPartition()

    for booking in bookings:
        if is_occupying(booking.status):
            result.occupying.append(booking)
        else:
            result.terminal.append(booking)

    return result
