"""Optional lookup data for a fresh clinic database."""

import logging

from clinic_booking.models import Room, RoomType, Specialty
from clinic_booking.services.store_service import ClinicStore

logger = logging.getLogger(__name__)


SPECIALTY_DATA = [
    {"name": "General Practice", "description": "Primary care and general consultations"},
    {"name": "Dermatology", "description": "Skin, hair and nail conditions"},
    {"name": "Pediatrics", "description": "Care for infants, children and adolescents"},
]

ROOM_DATA = [
    {"room_number": "101", "room_type": RoomType.CONSULTATION},
    {"room_number": "201", "room_type": RoomType.LAB},
]


def seed_lookups(store: ClinicStore) -> int:
    """Insert the default specialties and rooms that are not there yet.

    Returns:
        number of rows inserted (0 when already seeded)
    """
    inserted = 0

    for data in SPECIALTY_DATA:
        if store.query(Specialty, name=data["name"]).first() is None:
            store.create(Specialty, data)
            inserted += 1

    for data in ROOM_DATA:
        if store.query(Room, room_number=data["room_number"]).first() is None:
            store.create(Room, data)
            inserted += 1

    if inserted:
        logger.info(f"Seeded {inserted} lookup row(s)")
    else:
        logger.info("Lookup data already present, nothing seeded")
    return inserted
