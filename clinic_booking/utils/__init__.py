"""Utility modules for the clinic store."""

from clinic_booking.utils.timezone import utc_now, to_naive_utc

__all__ = [
    "utc_now",
    "to_naive_utc",
]
