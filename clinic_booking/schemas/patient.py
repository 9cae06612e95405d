"""Patient schemas."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime

from clinic_booking.models.enums import Sex


class PatientCreate(BaseModel):
    """Schema for registering a patient."""
    patient_id: Optional[int] = None
    first_name: str = Field(..., max_length=50)
    last_name: str = Field(..., max_length=50)
    date_of_birth: date
    sex: Sex
    email: Optional[str] = Field(None, max_length=100)
    phone: str = Field(..., max_length=25)
    national_id: Optional[str] = Field(None, max_length=50)

    class Config:
        extra = "forbid"


class PatientUpdate(BaseModel):
    """Schema for updating a patient. Changing patient_id cascades to appointments."""
    patient_id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    sex: Optional[Sex] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    national_id: Optional[str] = None

    class Config:
        extra = "forbid"


class PatientRead(BaseModel):
    """Patient snapshot."""
    patient_id: int
    first_name: str
    last_name: str
    date_of_birth: date
    sex: Sex
    email: Optional[str] = None
    phone: str
    national_id: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        frozen = True
