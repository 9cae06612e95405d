"""Appointment schemas."""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from clinic_booking.models.enums import AppointmentStatus
from clinic_booking.utils.timezone import to_naive_utc


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment.

    end_time > start_time is checked by the store, not here, so that
    updates touching only one of the two are validated against the merged row.
    """
    appointment_id: Optional[int] = None
    patient_id: int
    doctor_id: int
    room_id: Optional[int] = None
    start_time: datetime
    end_time: datetime
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    reason: Optional[str] = Field(None, max_length=255)

    class Config:
        extra = "forbid"

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_timestamp(cls, v):
        return to_naive_utc(v)


class AppointmentUpdate(BaseModel):
    appointment_id: Optional[int] = None
    patient_id: Optional[int] = None
    doctor_id: Optional[int] = None
    room_id: Optional[int] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: Optional[AppointmentStatus] = None
    reason: Optional[str] = None

    class Config:
        extra = "forbid"


class AppointmentRead(BaseModel):
    """Appointment snapshot."""
    appointment_id: int
    patient_id: int
    doctor_id: int
    room_id: Optional[int] = None
    start_time: datetime
    end_time: datetime
    status: AppointmentStatus
    reason: Optional[str] = None

    class Config:
        from_attributes = True
        frozen = True
