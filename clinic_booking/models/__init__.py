"""Database models for the clinic booking store."""

from clinic_booking.models.enums import (
    Sex,
    RoomType,
    RoomStatus,
    AppointmentStatus,
    InvoiceStatus,
    PaymentMethod,
)
from clinic_booking.models.doctor import Doctor, Specialty, DoctorSpecialty
from clinic_booking.models.patient import Patient
from clinic_booking.models.room import Room
from clinic_booking.models.appointment import Appointment
from clinic_booking.models.prescription import Prescription, Medication, PrescriptionItem
from clinic_booking.models.billing import Invoice, Payment

__all__ = [
    "Sex",
    "RoomType",
    "RoomStatus",
    "AppointmentStatus",
    "InvoiceStatus",
    "PaymentMethod",
    "Doctor",
    "Specialty",
    "DoctorSpecialty",
    "Patient",
    "Room",
    "Appointment",
    "Prescription",
    "Medication",
    "PrescriptionItem",
    "Invoice",
    "Payment",
]
