"""
Domain-specific exception hierarchy for the clinic slot resolver.
"""


class SlotError(Exception):
    """Base class for all application-level errors."""


class InvalidInterval(SlotError, ValueError):
    """Raised when a time slot is malformed or out of day bounds."""


class InvalidWorkingDay(SlotError, ValueError):
    """Raised when a working-day configuration cannot produce a grid."""


class BookingStoreError(SlotError):
    """Raised when booking data cannot be read or parsed."""


class UnknownPractitionerError(SlotError, LookupError):
    """Raised when a practitioner identifier cannot be resolved."""
