"""
Core business logic for enumerating free appointment slots.

Pure domain logic without any external dependencies (no database, no I/O).
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Iterator, List, Optional, Sequence

from .conflicts import check_conflict
from .exceptions import InvalidInterval
from .models import BookingWindow, TimeSlot, WorkingDay
from .status import occupying


class SlotCalculator:
    """
    Enumerates bookable slots of a working day.

    Algorithm:
    1. Build the grid of candidates at the day's granularity
    2. Drop candidates that would overrun the end of the day
    3. Keep candidates that conflict with no occupying booking

    Invalid arguments are rejected when a method is called, before any slot
    is yielded.
    """

    def __init__(self, working_day: WorkingDay):
        self.working_day = working_day

    def iter_grid(self, duration_minutes: Optional[int] = None) -> Iterator[TimeSlot]:
        """
        Return an iterator over every candidate slot of the working day.

        Candidates start every ``slot_granularity_minutes`` and last
        ``duration_minutes`` (the granularity by default). A trailing
        candidate that would end after ``end_minute`` is never yielded.
        """
        duration = self._resolve_duration(duration_minutes)
        return self._generate_grid(duration)

    def iter_free_slots(
        self,
        practitioner_id: str,
        day: date,
        bookings: Iterable[BookingWindow],
        duration_minutes: Optional[int] = None,
    ) -> Iterator[TimeSlot]:
        """
        Return a lazy iterator over the grid slots free for the practitioner.

        Each call starts a fresh pass over the grid.
        """
        duration = self._resolve_duration(duration_minutes)
        blocking = list(occupying(bookings))
        return self._generate_free(practitioner_id, day, blocking, duration)

    def find_free_slots(
        self,
        practitioner_id: str,
        day: date,
        bookings: Iterable[BookingWindow],
        duration_minutes: Optional[int] = None,
    ) -> List[TimeSlot]:
        """Return the free slots as a list."""
        return list(
            self.iter_free_slots(practitioner_id, day, bookings, duration_minutes)
        )

    def _generate_grid(self, duration: int) -> Iterator[TimeSlot]:
        day = self.working_day

        if not day.is_open:
            return

        start = day.start_minute
        while start + duration <= day.end_minute:
            yield TimeSlot(start, start + duration)
            start += day.slot_granularity_minutes

    def _generate_free(
        self,
        practitioner_id: str,
        day: date,
        blocking: Sequence[BookingWindow],
        duration: int,
    ) -> Iterator[TimeSlot]:
        for candidate in self._generate_grid(duration):
            result = check_conflict(candidate, practitioner_id, day, blocking)
            if result.available:
                yield candidate

    def _resolve_duration(self, duration_minutes: Optional[int]) -> int:
        if duration_minutes is None:
            return self.working_day.slot_granularity_minutes
        if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int):
            raise InvalidInterval(
                f"Slot duration must be an integer number of minutes, got {duration_minutes!r}"
            )
        if duration_minutes <= 0:
            raise InvalidInterval(f"Slot duration must be positive, got {duration_minutes}")
        return duration_minutes
