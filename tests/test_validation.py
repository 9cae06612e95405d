"""Tests for payload validation in schemas."""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pydantic import ValidationError

from clinic_booking.models import AppointmentStatus, InvoiceStatus, PaymentMethod, RoomStatus, RoomType, Sex
from clinic_booking.schemas import (
    AppointmentCreate,
    DoctorUpdate,
    InvoiceCreate,
    PatientCreate,
    PaymentCreate,
    RoomCreate,
)


class TestEnumDomains:
    """Enumerated values are reproduced exactly."""

    def test_values(self):
        assert [m.value for m in Sex] == ["F", "M", "X"]
        assert [m.value for m in RoomType] == ["Consultation", "Lab", "Surgery", "Other"]
        assert [m.value for m in RoomStatus] == ["Available", "Unavailable"]
        assert [m.value for m in AppointmentStatus] == ["Scheduled", "CheckedIn", "Completed", "Cancelled", "NoShow"]
        assert [m.value for m in InvoiceStatus] == ["Unpaid", "PartiallyPaid", "Paid", "Voided"]
        assert [m.value for m in PaymentMethod] == ["Cash", "Card", "MobileMoney", "Insurance"]

    def test_invalid_room_type(self):
        with pytest.raises(ValidationError):
            RoomCreate(room_number="301", room_type="Ward")

    def test_enum_values_are_case_sensitive(self):
        with pytest.raises(ValidationError):
            PaymentCreate(invoice_id=1, amount=10, method="cash")


class TestPatientValidation:

    def test_optional_fields(self):
        patient = PatientCreate(
            first_name="Kofi",
            last_name="Mensah",
            date_of_birth="1985-06-15",
            sex="M",
            phone="555-0102",
        )

        assert patient.email is None
        assert patient.national_id is None
        assert patient.sex is Sex.M

    def test_name_length(self):
        with pytest.raises(ValidationError):
            PatientCreate(
                first_name="A" * 51,
                last_name="Mensah",
                date_of_birth="1985-06-15",
                sex="M",
                phone="555-0102",
            )


class TestTimestamps:

    def test_aware_datetimes_become_naive_utc(self):
        eastern = timezone(timedelta(hours=-5))
        appointment = AppointmentCreate(
            patient_id=1,
            doctor_id=1,
            start_time=datetime(2024, 1, 1, 9, 0, tzinfo=eastern),
            end_time="2024-01-01T14:30:00Z",
        )

        assert appointment.start_time == datetime(2024, 1, 1, 14, 0)
        assert appointment.end_time == datetime(2024, 1, 1, 14, 30)

    def test_issued_at_defaults_to_now(self):
        before = datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0) - timedelta(seconds=1)
        invoice = InvoiceCreate(appointment_id=1, amount_due=50)

        assert invoice.issued_at >= before
        assert invoice.issued_at.tzinfo is None
        assert invoice.amount_paid == Decimal("0.00")
        assert invoice.status is InvoiceStatus.UNPAID


class TestUpdateSchemas:

    def test_only_set_fields_are_dumped(self):
        changes = DoctorUpdate(active=False)

        assert changes.model_dump(exclude_unset=True) == {"active": False}

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            DoctorUpdate(specialty="Cardiology")
