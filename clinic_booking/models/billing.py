"""Invoice and payment models."""

from sqlalchemy import Column, Integer, Numeric, DateTime, Enum, ForeignKey, CheckConstraint, Index, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from clinic_booking.database import Base
from clinic_booking.models.enums import InvoiceStatus, PaymentMethod, enum_values


class Invoice(Base):
    """One invoice per appointment."""

    __tablename__ = "invoices"

    invoice_id = Column(Integer, primary_key=True, autoincrement=True)
    appointment_id = Column(
        Integer,
        ForeignKey("appointments.appointment_id", name="fk_inv_appt", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    amount_due = Column(Numeric(10, 2), nullable=False)
    amount_paid = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(
        Enum(InvoiceStatus, name="invoice_status", values_callable=enum_values),
        nullable=False,
        default=InvoiceStatus.UNPAID,
    )
    issued_at = Column(DateTime, nullable=False, server_default=func.now())

    appointment = relationship("Appointment", viewonly=True)
    payments = relationship("Payment", viewonly=True, order_by="Payment.paid_at")

    __table_args__ = (
        UniqueConstraint("appointment_id", name="uq_invoices_appointment"),
        CheckConstraint("amount_due >= 0 AND amount_paid >= 0", name="chk_amounts_nonneg"),
    )

    def __repr__(self):
        return f"<Invoice {self.invoice_id} due={self.amount_due} paid={self.amount_paid}>"


class Payment(Base):
    """Payment against an invoice (many per invoice)."""

    __tablename__ = "payments"

    payment_id = Column(Integer, primary_key=True, autoincrement=True)
    invoice_id = Column(
        Integer,
        ForeignKey("invoices.invoice_id", name="fk_pay_invoice", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    amount = Column(Numeric(10, 2), nullable=False)
    paid_at = Column(DateTime, nullable=False, server_default=func.now())
    method = Column(Enum(PaymentMethod, name="payment_method", values_callable=enum_values), nullable=False)

    invoice = relationship("Invoice", viewonly=True)

    __table_args__ = (
        CheckConstraint("amount > 0", name="chk_payment_pos"),
        Index("ix_payments_invoice", "invoice_id"),
    )

    def __repr__(self):
        return f"<Payment {self.payment_id} invoice={self.invoice_id} {self.amount} {self.method}>"
