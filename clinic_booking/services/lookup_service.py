"""Index-backed lookups over the clinic store."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select

from clinic_booking.models import (
    Appointment,
    Doctor,
    DoctorSpecialty,
    Invoice,
    Patient,
    Payment,
    Prescription,
    PrescriptionItem,
    Specialty,
)
from clinic_booking.services.store_service import ClinicStore, QueryResult
from clinic_booking.utils.timezone import to_naive_utc

logger = logging.getLogger(__name__)


class LookupService:
    """Common read paths, each served by one of the declared indexes."""

    def __init__(self, store: ClinicStore):
        self.store = store

    # Names: ix_doctors_name / ix_patients_name (last_name, first_name)

    def doctors_by_name(self, last_name: str, first_name: Optional[str] = None) -> QueryResult:
        filters = {"last_name": last_name}
        if first_name is not None:
            filters["first_name"] = first_name
        return self.store.query(
            Doctor, order_by=[Doctor.last_name, Doctor.first_name, Doctor.doctor_id], **filters
        )

    def patients_by_name(self, last_name: str, first_name: Optional[str] = None) -> QueryResult:
        filters = {"last_name": last_name}
        if first_name is not None:
            filters["first_name"] = first_name
        return self.store.query(
            Patient, order_by=[Patient.last_name, Patient.first_name, Patient.patient_id], **filters
        )

    # Schedules: ix_appt_doctor_time / ix_appt_patient_time

    def appointments_for_doctor(
        self, doctor_id: int, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> QueryResult:
        """Appointments of a doctor starting in [start, end), ordered by start_time."""
        criteria = [Appointment.doctor_id == doctor_id] + self._time_window(start, end)
        return self.store.query(Appointment, *criteria, order_by=Appointment.start_time)

    def appointments_for_patient(
        self, patient_id: int, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> QueryResult:
        """Appointments of a patient starting in [start, end), ordered by start_time."""
        criteria = [Appointment.patient_id == patient_id] + self._time_window(start, end)
        return self.store.query(Appointment, *criteria, order_by=Appointment.start_time)

    @staticmethod
    def _time_window(start: Optional[datetime], end: Optional[datetime]) -> list:
        criteria = []
        if start is not None:
            criteria.append(Appointment.start_time >= to_naive_utc(start))
        if end is not None:
            criteria.append(Appointment.start_time < to_naive_utc(end))
        return criteria

    # Billing: ix_payments_invoice

    def payments_for_invoice(self, invoice_id: int) -> QueryResult:
        return self.store.query(
            Payment, Payment.invoice_id == invoice_id, order_by=[Payment.paid_at, Payment.payment_id]
        )

    def total_paid(self, invoice_id: int) -> Decimal:
        """Sum of recorded payments; does not touch Invoice.amount_paid."""
        return sum((payment.amount for payment in self.payments_for_invoice(invoice_id)), Decimal("0.00"))

    def invoice_for_appointment(self, appointment_id: int):
        return self.store.query(Invoice, appointment_id=appointment_id).first()

    def prescription_for_appointment(self, appointment_id: int):
        return self.store.query(Prescription, appointment_id=appointment_id).first()

    # Join navigation

    def specialties_for_doctor(self, doctor_id: int) -> List:
        linked = select(DoctorSpecialty.specialty_id).where(DoctorSpecialty.doctor_id == doctor_id)
        return self.store.query(Specialty, Specialty.specialty_id.in_(linked), order_by=Specialty.name).all()

    def doctors_for_specialty(self, specialty_id: int) -> List:
        linked = select(DoctorSpecialty.doctor_id).where(DoctorSpecialty.specialty_id == specialty_id)
        return self.store.query(
            Doctor, Doctor.doctor_id.in_(linked), order_by=[Doctor.last_name, Doctor.first_name]
        ).all()

    def items_for_prescription(self, prescription_id: int) -> List:
        return self.store.query(
            PrescriptionItem,
            order_by=PrescriptionItem.medication_id,
            prescription_id=prescription_id,
        ).all()
