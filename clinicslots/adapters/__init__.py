"""
Adapters for external systems (booking stores, wall-clock strings).
"""

from .clock import format_booking, format_clock, format_slot, parse_clock, parse_slot
from .json_booking_store import JsonBookingStore

__all__ = ["JsonBookingStore", "format_booking", "format_clock", "format_slot", "parse_clock", "parse_slot"]
