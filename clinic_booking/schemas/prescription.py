"""Prescription, medication and prescription item schemas."""

from pydantic import BaseModel, Field
from typing import Optional


class PrescriptionCreate(BaseModel):
    prescription_id: Optional[int] = None
    appointment_id: int
    notes: Optional[str] = Field(None, max_length=500)

    class Config:
        extra = "forbid"


class PrescriptionUpdate(BaseModel):
    prescription_id: Optional[int] = None
    appointment_id: Optional[int] = None
    notes: Optional[str] = None

    class Config:
        extra = "forbid"


class PrescriptionRead(BaseModel):
    prescription_id: int
    appointment_id: int
    notes: Optional[str] = None

    class Config:
        from_attributes = True
        frozen = True


class MedicationCreate(BaseModel):
    medication_id: Optional[int] = None
    name: str = Field(..., max_length=120)
    unit: str = Field(..., max_length=20)

    class Config:
        extra = "forbid"


class MedicationUpdate(BaseModel):
    medication_id: Optional[int] = None
    name: Optional[str] = None
    unit: Optional[str] = None

    class Config:
        extra = "forbid"


class MedicationRead(BaseModel):
    medication_id: int
    name: str
    unit: str

    class Config:
        from_attributes = True
        frozen = True


class PrescriptionItemCreate(BaseModel):
    """Medication line; quantity > 0 is checked by the store."""
    prescription_id: int
    medication_id: int
    dosage: str = Field(..., max_length=50)
    quantity: int
    instructions: Optional[str] = Field(None, max_length=255)

    class Config:
        extra = "forbid"


class PrescriptionItemUpdate(BaseModel):
    prescription_id: Optional[int] = None
    medication_id: Optional[int] = None
    dosage: Optional[str] = None
    quantity: Optional[int] = None
    instructions: Optional[str] = None

    class Config:
        extra = "forbid"


class PrescriptionItemRead(BaseModel):
    prescription_id: int
    medication_id: int
    dosage: str
    quantity: int
    instructions: Optional[str] = None

    class Config:
        from_attributes = True
        frozen = True
