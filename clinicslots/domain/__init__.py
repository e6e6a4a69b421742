"""
Domain layer - Pure business logic without external dependencies.
"""

from .conflicts import AvailabilityResult, check_conflict
from .exceptions import (
    BookingStoreError,
    InvalidInterval,
    InvalidWorkingDay,
    SlotError,
    UnknownPractitionerError,
)
from .models import BookingStatus, BookingWindow, TimeSlot, WorkingDay
from .slot_calculator import SlotCalculator
from .status import (
    OCCUPYING_STATUSES,
    TERMINAL_STATUSES,
    BookingPartition,
    is_occupying,
    occupying,
    partition,
)

__all__ = [
    "AvailabilityResult",
    "BookingPartition",
    "BookingStatus",
    "BookingStoreError",
    "BookingWindow",
    "InvalidInterval",
    "InvalidWorkingDay",
    "OCCUPYING_STATUSES",
    "SlotCalculator",
    "SlotError",
    "TERMINAL_STATUSES",
    "TimeSlot",
    "UnknownPractitionerError",
    "WorkingDay",
    "check_conflict",
    "is_occupying",
    "occupying",
    "partition",
]
