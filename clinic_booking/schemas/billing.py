"""Invoice and payment schemas."""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal

from clinic_booking.models.enums import InvoiceStatus, PaymentMethod
from clinic_booking.utils.timezone import utc_now, to_naive_utc


class InvoiceCreate(BaseModel):
    """Schema for issuing an invoice. Amount signs are checked by the store."""
    invoice_id: Optional[int] = None
    appointment_id: int
    amount_due: Decimal = Field(..., max_digits=10, decimal_places=2)
    amount_paid: Decimal = Field(Decimal("0.00"), max_digits=10, decimal_places=2)
    status: InvoiceStatus = InvoiceStatus.UNPAID
    issued_at: datetime = Field(default_factory=utc_now)

    class Config:
        extra = "forbid"

    @field_validator("issued_at")
    @classmethod
    def normalize_timestamp(cls, v):
        return to_naive_utc(v)


class InvoiceUpdate(BaseModel):
    invoice_id: Optional[int] = None
    appointment_id: Optional[int] = None
    amount_due: Optional[Decimal] = None
    amount_paid: Optional[Decimal] = None
    status: Optional[InvoiceStatus] = None
    issued_at: Optional[datetime] = None

    class Config:
        extra = "forbid"


class InvoiceRead(BaseModel):
    invoice_id: int
    appointment_id: int
    amount_due: Decimal
    amount_paid: Decimal
    status: InvoiceStatus
    issued_at: datetime

    class Config:
        from_attributes = True
        frozen = True


class PaymentCreate(BaseModel):
    """Schema for recording a payment. amount > 0 is checked by the store."""
    payment_id: Optional[int] = None
    invoice_id: int
    amount: Decimal = Field(..., max_digits=10, decimal_places=2)
    paid_at: datetime = Field(default_factory=utc_now)
    method: PaymentMethod

    class Config:
        extra = "forbid"

    @field_validator("paid_at")
    @classmethod
    def normalize_timestamp(cls, v):
        return to_naive_utc(v)


class PaymentUpdate(BaseModel):
    payment_id: Optional[int] = None
    invoice_id: Optional[int] = None
    amount: Optional[Decimal] = None
    paid_at: Optional[datetime] = None
    method: Optional[PaymentMethod] = None

    class Config:
        extra = "forbid"


class PaymentRead(BaseModel):
    payment_id: int
    invoice_id: int
    amount: Decimal
    paid_at: datetime
    method: PaymentMethod

    class Config:
        from_attributes = True
        frozen = True
