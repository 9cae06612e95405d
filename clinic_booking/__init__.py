"""Clinic booking store: constrained entities for doctors, patients, appointments and billing."""

from clinic_booking.exceptions import (
    StoreError,
    UniquenessViolation,
    ReferenceViolation,
    ConstraintViolation,
    RecordNotFound,
)
from clinic_booking.services import ClinicStore, LookupService, seed_lookups

__version__ = "1.0.0"

__all__ = [
    "StoreError",
    "UniquenessViolation",
    "ReferenceViolation",
    "ConstraintViolation",
    "RecordNotFound",
    "ClinicStore",
    "LookupService",
    "seed_lookups",
]
