"""
Application service answering availability questions for an HTTP layer.

The service fetches bookings through a booking-store protocol and delegates
every decision to the pure domain functions. Its answers are advisory: the
booking store must re-check availability and insert the new booking within
one atomic operation (unique index or serializable transaction), since two
callers may propose the same slot concurrently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Protocol

from ..adapters.clock import format_booking, format_slot
from ..config import AppConfig
from ..domain.conflicts import AvailabilityResult, check_conflict
from ..domain.models import BookingWindow, TimeSlot, WorkingDay
from ..domain.slot_calculator import SlotCalculator
from ..domain.status import partition

logger = logging.getLogger(__name__)


class BookingStoreProtocol(Protocol):
    """Protocol describing the booking store behaviour needed by the service."""

    def get_bookings(self, practitioner_id: str, day: date) -> List[BookingWindow]:
        """Return the non-deleted bookings of a practitioner on a day."""


@dataclass
class DaySummary:
    """Dashboard view of one practitioner's day."""
    practitioner_id: str
    day: date
    working_day: WorkingDay
    occupying_count: int
    terminal_count: int
    free_slots: List[TimeSlot] = field(default_factory=list)

    @property
    def fully_booked(self) -> bool:
        """True when an open day has no free slot left."""
        return self.working_day.is_open and not self.free_slots


class AvailabilityService:
    """
    Facade over the booking store and the slot domain logic.

    A config is only required when callers omit the working day and expect
    it to be derived from the configured business hours.
    """

    def __init__(
        self,
        booking_store: BookingStoreProtocol,
        config: Optional[AppConfig] = None,
    ) -> None:
        self._booking_store = booking_store
        self._config = config

    def check_availability(
        self,
        candidate_slot: TimeSlot,
        practitioner_id: str,
        day: date,
        exclude_booking_id: Optional[str] = None,
    ) -> AvailabilityResult:
        """Check whether a candidate slot is free for the practitioner."""
        bookings = self._booking_store.get_bookings(practitioner_id, day)
        result = check_conflict(
            candidate_slot,
            practitioner_id,
            day,
            bookings,
            exclude_booking_id=exclude_booking_id,
        )

        logger.info(
            "Availability of %s for %s on %s: %s",
            format_slot(candidate_slot), practitioner_id, day,
            "free" if result.available else "taken",
        )
        for booking in result.conflicting_windows:
            logger.debug("Conflicts with %s", format_booking(booking))
        return result

    def list_free_slots(
        self,
        working_day: Optional[WorkingDay],
        practitioner_id: str,
        day: date,
        duration_minutes: Optional[int] = None,
    ) -> List[TimeSlot]:
        """List the free slots of the practitioner's working day."""
        working_day = self._resolve_working_day(working_day, practitioner_id, day)
        bookings = self._booking_store.get_bookings(practitioner_id, day)
        return SlotCalculator(working_day).find_free_slots(
            practitioner_id, day, bookings, duration_minutes
        )

    def is_fully_booked(
        self,
        practitioner_id: str,
        day: date,
        working_day: Optional[WorkingDay] = None,
    ) -> bool:
        """Return True when an open day has no free slot left."""
        return self.day_summary(practitioner_id, day, working_day).fully_booked

    def day_summary(
        self,
        practitioner_id: str,
        day: date,
        working_day: Optional[WorkingDay] = None,
    ) -> DaySummary:
        """Summarise occupying vs. terminal bookings and free slots for a day."""
        working_day = self._resolve_working_day(working_day, practitioner_id, day)
        bookings = self._booking_store.get_bookings(practitioner_id, day)
        groups = partition(bookings)
        free_slots = SlotCalculator(working_day).find_free_slots(
            practitioner_id, day, groups.occupying
        )

        return DaySummary(
            practitioner_id=practitioner_id,
            day=day,
            working_day=working_day,
            occupying_count=len(groups.occupying),
            terminal_count=len(groups.terminal),
            free_slots=free_slots,
        )

    def _resolve_working_day(
        self,
        working_day: Optional[WorkingDay],
        practitioner_id: str,
        day: date,
    ) -> WorkingDay:
        if working_day is not None:
            return working_day
        if self._config is None:
            raise ValueError("A working day is required when no configuration is provided.")
        return self._config.working_day_for(practitioner_id, day)
