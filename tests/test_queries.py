"""Tests for store queries, lookups and lookup seeding."""

import pytest
from datetime import datetime
from decimal import Decimal
from pydantic import ValidationError

from clinic_booking.models import Doctor, DoctorSpecialty, Payment, PrescriptionItem, Room, Specialty
from clinic_booking.services import QueryResult, seed_lookups
from clinic_booking.services.seed_service import ROOM_DATA, SPECIALTY_DATA


class TestQuery:
    """Lazy, restartable queries."""

    def test_query_is_lazy_and_restartable(self, store, make_doctor):
        make_doctor()
        result = store.query(Doctor)
        assert isinstance(result, QueryResult)

        make_doctor()
        first_pass = [doctor.doctor_id for doctor in result]
        second_pass = [doctor.doctor_id for doctor in result]

        # Rows created after query() but before iteration are included
        assert len(first_pass) == 2
        assert first_pass == second_pass

    def test_query_filters_and_criteria(self, store, make_doctor):
        make_doctor(active=False)
        active = make_doctor(active=True)

        by_filter = store.query(Doctor, active=True).all()
        by_criteria = store.query(Doctor, Doctor.active.is_(True)).all()

        assert by_filter == by_criteria == [active]

    def test_query_predicate(self, store, make_doctor):
        make_doctor(license_no="A-1")
        wanted = make_doctor(license_no="B-1")

        result = store.query(Doctor, predicate=lambda doctor: doctor.license_no.startswith("B"))

        assert result.all() == [wanted]
        assert result.count() == 1

    def test_query_order_by(self, store, make_doctor):
        make_doctor(last_name="Zed")
        make_doctor(last_name="Abe")

        names = [doctor.last_name for doctor in store.query(Doctor, order_by=Doctor.last_name)]

        assert names == ["Abe", "Zed"]

    def test_query_streams_in_batches(self, session_factory, make_room):
        from clinic_booking.services import ClinicStore

        small_batches = ClinicStore(session_factory, batch_size=2)
        for _ in range(5):
            make_room()

        assert small_batches.query(Room).count() == 5

    def test_first_on_empty(self, store):
        assert store.query(Doctor).first() is None

    def test_snapshots_are_frozen(self, make_doctor):
        doctor = make_doctor()

        with pytest.raises(ValidationError):
            doctor.email = "changed@clinic.test"

    def test_get_missing(self, store):
        assert store.get(Doctor, 99) is None


class TestLookups:
    """Index-backed lookups."""

    def test_doctors_by_name(self, lookups, make_doctor):
        make_doctor(first_name="Zoe", last_name="Smith")
        make_doctor(first_name="Adam", last_name="Smith")
        make_doctor(first_name="Adam", last_name="Jones")

        smiths = [doctor.first_name for doctor in lookups.doctors_by_name("Smith")]
        adam_smith = lookups.doctors_by_name("Smith", "Adam").all()

        assert smiths == ["Adam", "Zoe"]
        assert len(adam_smith) == 1

    def test_patients_by_name(self, lookups, make_patient):
        make_patient(first_name="Ben", last_name="Okoro")
        make_patient(first_name="Ama", last_name="Okoro")

        assert [p.first_name for p in lookups.patients_by_name("Okoro")] == ["Ama", "Ben"]

    def test_appointments_for_doctor_in_range(self, lookups, make_doctor, make_appointment):
        doctor = make_doctor()
        for hour in (15, 9, 12):
            make_appointment(
                doctor_id=doctor.doctor_id,
                start_time=datetime(2024, 2, 1, hour, 0),
                end_time=datetime(2024, 2, 1, hour, 30),
            )
        make_appointment(start_time=datetime(2024, 2, 1, 10, 0), end_time=datetime(2024, 2, 1, 10, 30))

        all_day = lookups.appointments_for_doctor(doctor.doctor_id).all()
        morning = lookups.appointments_for_doctor(
            doctor.doctor_id, start=datetime(2024, 2, 1, 9, 0), end=datetime(2024, 2, 1, 12, 0)
        ).all()

        assert [a.start_time.hour for a in all_day] == [9, 12, 15]
        # Half-open range: 12:00 is excluded
        assert [a.start_time.hour for a in morning] == [9]

    def test_appointments_for_patient(self, lookups, make_patient, make_appointment):
        patient = make_patient()
        make_appointment(patient_id=patient.patient_id)
        make_appointment(patient_id=patient.patient_id)
        make_appointment()

        assert lookups.appointments_for_patient(patient.patient_id).count() == 2

    def test_payments_and_total(self, store, lookups, make_invoice):
        invoice = make_invoice(amount_due=100)
        store.create(Payment, {"invoice_id": invoice.invoice_id, "amount": "25.50", "method": "Cash",
                               "paid_at": datetime(2024, 1, 2)})
        store.create(Payment, {"invoice_id": invoice.invoice_id, "amount": "10.00", "method": "Card",
                               "paid_at": datetime(2024, 1, 1)})

        payments = lookups.payments_for_invoice(invoice.invoice_id).all()

        assert [p.amount for p in payments] == [Decimal("10.00"), Decimal("25.50")]
        assert lookups.total_paid(invoice.invoice_id) == Decimal("35.50")
        assert lookups.total_paid(999) == Decimal("0.00")

    def test_one_to_one_lookups(self, lookups, make_appointment, make_prescription, make_invoice):
        appointment = make_appointment()
        prescription = make_prescription(appointment_id=appointment.appointment_id)
        invoice = make_invoice(appointment_id=appointment.appointment_id)

        assert lookups.prescription_for_appointment(appointment.appointment_id) == prescription
        assert lookups.invoice_for_appointment(appointment.appointment_id) == invoice
        assert lookups.invoice_for_appointment(999) is None

    def test_join_navigation(self, store, lookups, make_doctor, make_specialty):
        doctor = make_doctor(last_name="Adeyemi")
        colleague = make_doctor(last_name="Banda")
        cardiology = make_specialty(name="Cardiology")
        dermatology = make_specialty(name="Dermatology")
        for d, s in [(doctor, dermatology), (doctor, cardiology), (colleague, cardiology)]:
            store.create(DoctorSpecialty, {"doctor_id": d.doctor_id, "specialty_id": s.specialty_id})

        assert [s.name for s in lookups.specialties_for_doctor(doctor.doctor_id)] == ["Cardiology", "Dermatology"]
        assert [d.last_name for d in lookups.doctors_for_specialty(cardiology.specialty_id)] == ["Adeyemi", "Banda"]

    def test_items_for_prescription(self, store, lookups, make_prescription, make_medication):
        prescription = make_prescription()
        for medication in (make_medication(), make_medication()):
            store.create(PrescriptionItem, {
                "prescription_id": prescription.prescription_id,
                "medication_id": medication.medication_id,
                "dosage": "10mg",
                "quantity": 1,
            })

        items = lookups.items_for_prescription(prescription.prescription_id)

        assert len(items) == 2
        assert items[0].medication_id < items[1].medication_id


class TestSeed:
    """Default lookup rows."""

    def test_seed_is_idempotent(self, store):
        assert seed_lookups(store) == len(SPECIALTY_DATA) + len(ROOM_DATA)
        assert seed_lookups(store) == 0

        assert {s.name for s in store.query(Specialty)} == {"General Practice", "Dermatology", "Pediatrics"}
        assert {r.room_number for r in store.query(Room)} == {"101", "201"}

    def test_seed_skips_existing_rows(self, store, make_specialty):
        make_specialty(name="Dermatology")

        assert seed_lookups(store) == len(SPECIALTY_DATA) + len(ROOM_DATA) - 1
