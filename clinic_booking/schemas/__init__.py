"""Pydantic schemas for payload validation and record snapshots."""

from typing import NamedTuple, Type

from pydantic import BaseModel

from clinic_booking.schemas.doctor import (
    DoctorCreate,
    DoctorUpdate,
    DoctorRead,
    SpecialtyCreate,
    SpecialtyUpdate,
    SpecialtyRead,
    DoctorSpecialtyCreate,
    DoctorSpecialtyUpdate,
    DoctorSpecialtyRead,
)
from clinic_booking.schemas.patient import PatientCreate, PatientUpdate, PatientRead
from clinic_booking.schemas.room import RoomCreate, RoomUpdate, RoomRead
from clinic_booking.schemas.appointment import AppointmentCreate, AppointmentUpdate, AppointmentRead
from clinic_booking.schemas.prescription import (
    PrescriptionCreate,
    PrescriptionUpdate,
    PrescriptionRead,
    MedicationCreate,
    MedicationUpdate,
    MedicationRead,
    PrescriptionItemCreate,
    PrescriptionItemUpdate,
    PrescriptionItemRead,
)
from clinic_booking.schemas.billing import (
    InvoiceCreate,
    InvoiceUpdate,
    InvoiceRead,
    PaymentCreate,
    PaymentUpdate,
    PaymentRead,
)


class SchemaSet(NamedTuple):
    create: Type[BaseModel]
    update: Type[BaseModel]
    read: Type[BaseModel]


# Keyed by table name
SCHEMAS = {
    "doctors": SchemaSet(DoctorCreate, DoctorUpdate, DoctorRead),
    "specialties": SchemaSet(SpecialtyCreate, SpecialtyUpdate, SpecialtyRead),
    "doctor_specialty": SchemaSet(DoctorSpecialtyCreate, DoctorSpecialtyUpdate, DoctorSpecialtyRead),
    "patients": SchemaSet(PatientCreate, PatientUpdate, PatientRead),
    "rooms": SchemaSet(RoomCreate, RoomUpdate, RoomRead),
    "appointments": SchemaSet(AppointmentCreate, AppointmentUpdate, AppointmentRead),
    "prescriptions": SchemaSet(PrescriptionCreate, PrescriptionUpdate, PrescriptionRead),
    "medications": SchemaSet(MedicationCreate, MedicationUpdate, MedicationRead),
    "prescription_items": SchemaSet(PrescriptionItemCreate, PrescriptionItemUpdate, PrescriptionItemRead),
    "invoices": SchemaSet(InvoiceCreate, InvoiceUpdate, InvoiceRead),
    "payments": SchemaSet(PaymentCreate, PaymentUpdate, PaymentRead),
}

__all__ = [
    "SchemaSet",
    "SCHEMAS",
    "DoctorCreate",
    "DoctorUpdate",
    "DoctorRead",
    "SpecialtyCreate",
    "SpecialtyUpdate",
    "SpecialtyRead",
    "DoctorSpecialtyCreate",
    "DoctorSpecialtyUpdate",
    "DoctorSpecialtyRead",
    "PatientCreate",
    "PatientUpdate",
    "PatientRead",
    "RoomCreate",
    "RoomUpdate",
    "RoomRead",
    "AppointmentCreate",
    "AppointmentUpdate",
    "AppointmentRead",
    "PrescriptionCreate",
    "PrescriptionUpdate",
    "PrescriptionRead",
    "MedicationCreate",
    "MedicationUpdate",
    "MedicationRead",
    "PrescriptionItemCreate",
    "PrescriptionItemUpdate",
    "PrescriptionItemRead",
    "InvoiceCreate",
    "InvoiceUpdate",
    "InvoiceRead",
    "PaymentCreate",
    "PaymentUpdate",
    "PaymentRead",
]
