"""
Create the clinic booking tables and optionally seed lookup data.

Usage:
    python scripts/init_db.py            # create missing tables
    python scripts/init_db.py --reset    # drop and re-create every table
    python scripts/init_db.py --seed     # also insert default specialties and rooms
"""

import logging
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from clinic_booking.config import settings
from clinic_booking.database import SessionLocal, init_db, reset_db, health_check
from clinic_booking.models import Doctor, Patient, Room, Specialty
from clinic_booking.services import ClinicStore, seed_lookups

logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)


def verify_data(store: ClinicStore):
    """Print table counts."""
    print("\nDatabase Statistics:")
    for model in (Doctor, Specialty, Patient, Room):
        print(f"  {model.__tablename__:<15} {store.count(model)}")


if __name__ == "__main__":
    args = set(sys.argv[1:])

    if not health_check():
        print(f"✗ Cannot connect to {settings.DATABASE_URL}")
        sys.exit(1)

    if "--reset" in args:
        print("Dropping and re-creating all clinic tables...")
        reset_db()
    else:
        print("Initializing database...")
        init_db()

    store = ClinicStore(SessionLocal)
    if "--seed" in args:
        added = seed_lookups(store)
        print(f"✓ Seeded {added} lookup row(s)")

    verify_data(store)
    print("\n✓ Database ready")
