"""Store and lookup services for the clinic booking schema."""

from clinic_booking.services.store_service import ClinicStore, QueryResult
from clinic_booking.services.lookup_service import LookupService
from clinic_booking.services.seed_service import seed_lookups

__all__ = [
    "ClinicStore",
    "QueryResult",
    "LookupService",
    "seed_lookups",
]
