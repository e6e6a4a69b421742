"""
Booking store backed by a JSON export of appointment records.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List

import pendulum

from ..domain.exceptions import BookingStoreError
from ..domain.models import BookingWindow
from .clock import parse_slot

logger = logging.getLogger(__name__)

_TRUTHY_FLAGS = {"true", "1", "yes"}


def _is_deleted(flag: Any) -> bool:
    """Interpret the soft-delete flag; exports may write it as a bool or a string."""
    if isinstance(flag, str):
        return flag.strip().lower() in _TRUTHY_FLAGS
    return flag is True or flag == 1


class JsonBookingStore:
    """
    Reads bookings from a JSON file.

    The file holds a list of records such as::

        {
            "booking_id": "APT000042",
            "practitioner_id": "doc-1",
            "date": "2024-11-25",
            "start": "10:00",
            "end": "10:30",
            "status": "scheduled"
        }

    Records marked ``"deleted": true`` are treated as soft-deleted and never
    returned. Records that cannot be parsed are skipped with a warning.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def get_bookings(self, practitioner_id: str, day: date) -> List[BookingWindow]:
        """
        Return the bookings of a practitioner on a day, ordered by start time.

        Raises:
            BookingStoreError: If the file cannot be read or is malformed
        """
        bookings: List[BookingWindow] = []

        for index, record in enumerate(self._load_records()):
            if _is_deleted(record.get("deleted")):
                continue
            if str(record.get("practitioner_id", "")) != practitioner_id:
                continue

            try:
                booking = self._parse_record(record)
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping booking record #%d in %s: %s", index, self.path, exc)
                continue

            if booking.date == day:
                bookings.append(booking)

        bookings.sort(key=lambda b: b.slot)
        logger.debug("Loaded %d booking(s) for %s on %s", len(bookings), practitioner_id, day)
        return bookings

    def _load_records(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            raise BookingStoreError(f"Bookings file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise BookingStoreError(f"Could not read bookings from {self.path}: {exc}") from exc

        if not isinstance(data, list):
            raise BookingStoreError(f"Bookings file {self.path} must contain a JSON list.")

        return [record for record in data if isinstance(record, dict)]

    @staticmethod
    def _parse_record(record: Dict[str, Any]) -> BookingWindow:
        try:
            day = pendulum.from_format(str(record["date"]), "YYYY-MM-DD").date()
        except ValueError as exc:
            raise ValueError(f"invalid date {record['date']!r}") from exc

        # InvalidInterval is a ValueError
        slot = parse_slot(record["start"], record["end"])
        booking_id = record.get("booking_id")

        return BookingWindow(
            practitioner_id=str(record["practitioner_id"]),
            date=day,
            slot=slot,
            status=record.get("status", "scheduled"),
            booking_id=str(booking_id) if booking_id is not None else None,
        )
