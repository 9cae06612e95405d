"""Doctor, specialty and doctor-specialty schemas."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime


class DoctorCreate(BaseModel):
    """Schema for registering a doctor."""
    doctor_id: Optional[int] = None
    first_name: str = Field(..., max_length=50)
    last_name: str = Field(..., max_length=50)
    email: str = Field(..., max_length=100)
    phone: str = Field(..., max_length=25)
    license_no: str = Field(..., max_length=50)
    hire_date: date
    active: bool = True

    class Config:
        extra = "forbid"


class DoctorUpdate(BaseModel):
    """Schema for updating a doctor. Changing doctor_id cascades to dependents."""
    doctor_id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    license_no: Optional[str] = None
    hire_date: Optional[date] = None
    active: Optional[bool] = None

    class Config:
        extra = "forbid"


class DoctorRead(BaseModel):
    """Doctor snapshot."""
    doctor_id: int
    first_name: str
    last_name: str
    email: str
    phone: str
    license_no: str
    hire_date: date
    active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        frozen = True


class SpecialtyCreate(BaseModel):
    specialty_id: Optional[int] = None
    name: str = Field(..., max_length=100)
    description: Optional[str] = Field(None, max_length=255)

    class Config:
        extra = "forbid"


class SpecialtyUpdate(BaseModel):
    specialty_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None

    class Config:
        extra = "forbid"


class SpecialtyRead(BaseModel):
    specialty_id: int
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True
        frozen = True


class DoctorSpecialtyCreate(BaseModel):
    doctor_id: int
    specialty_id: int

    class Config:
        extra = "forbid"


class DoctorSpecialtyUpdate(BaseModel):
    doctor_id: Optional[int] = None
    specialty_id: Optional[int] = None

    class Config:
        extra = "forbid"


class DoctorSpecialtyRead(BaseModel):
    doctor_id: int
    specialty_id: int

    class Config:
        from_attributes = True
        frozen = True
