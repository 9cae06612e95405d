"""Pytest configuration and fixtures."""

import itertools
from datetime import date, datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinic_booking.database import Base, configure_sqlite
from clinic_booking.models import (
    Appointment,
    Doctor,
    Invoice,
    Medication,
    Patient,
    Prescription,
    Room,
    Specialty,
)
from clinic_booking.services import ClinicStore, LookupService


# Create test database
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function", params=[True, False], ids=["engine-fk", "store-only"])
def engine(request):
    """Fresh in-memory database, with and without engine-side foreign keys.

    The store must behave identically either way.
    """
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    configure_sqlite(engine, foreign_keys=request.param)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def store(session_factory):
    return ClinicStore(session_factory)


@pytest.fixture
def lookups(store):
    return LookupService(store)


@pytest.fixture
def snapshot_counts(store):
    """Row count per table, for asserting a rejected operation changed nothing."""
    def _counts():
        return {table: store.count(table) for table in store.rules}
    return _counts


@pytest.fixture
def make_doctor(store):
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        data = {
            "first_name": "Grace",
            "last_name": f"Hopper{n}",
            "email": f"doctor{n}@clinic.test",
            "phone": f"+1-555-000-{n:04d}",
            "license_no": f"LIC-{n:05d}",
            "hire_date": date(2020, 1, 15),
        }
        data.update(overrides)
        return store.create(Doctor, data)
    return _make


@pytest.fixture
def make_patient(store):
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        data = {
            "first_name": "Ada",
            "last_name": f"Lovelace{n}",
            "date_of_birth": date(1990, 5, 17),
            "sex": "F",
            "phone": f"+1-555-100-{n:04d}",
        }
        data.update(overrides)
        return store.create(Patient, data)
    return _make


@pytest.fixture
def make_room(store):
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        data = {"room_number": f"R{n:03d}", "room_type": "Consultation"}
        data.update(overrides)
        return store.create(Room, data)
    return _make


@pytest.fixture
def make_specialty(store):
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        data = {"name": f"Specialty {n}", "description": "Test specialty"}
        data.update(overrides)
        return store.create(Specialty, data)
    return _make


@pytest.fixture
def make_medication(store):
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        data = {"name": f"Medication {n}", "unit": "mg"}
        data.update(overrides)
        return store.create(Medication, data)
    return _make


@pytest.fixture
def make_appointment(store, make_doctor, make_patient):
    counter = itertools.count(0)

    def _make(**overrides):
        n = next(counter)
        start = datetime(2024, 1, 1, 9, 0) + timedelta(hours=n)
        data = {
            "start_time": start,
            "end_time": start + timedelta(minutes=30),
            "reason": "Check-up",
        }
        data.update(overrides)
        if "doctor_id" not in data:
            data["doctor_id"] = make_doctor().doctor_id
        if "patient_id" not in data:
            data["patient_id"] = make_patient().patient_id
        return store.create(Appointment, data)
    return _make


@pytest.fixture
def make_prescription(store, make_appointment):
    def _make(**overrides):
        data = {"notes": "Take with food"}
        data.update(overrides)
        if "appointment_id" not in data:
            data["appointment_id"] = make_appointment().appointment_id
        return store.create(Prescription, data)
    return _make


@pytest.fixture
def make_invoice(store, make_appointment):
    def _make(**overrides):
        data = {"amount_due": "100.00"}
        data.update(overrides)
        if "appointment_id" not in data:
            data["appointment_id"] = make_appointment().appointment_id
        return store.create(Invoice, data)
    return _make
