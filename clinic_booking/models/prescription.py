"""Prescription, medication catalog and prescription items."""

from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship
from clinic_booking.database import Base


class Prescription(Base):
    """At most one prescription per appointment."""

    __tablename__ = "prescriptions"

    prescription_id = Column(Integer, primary_key=True, autoincrement=True)
    appointment_id = Column(
        Integer,
        ForeignKey("appointments.appointment_id", name="fk_rx_appt", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
    )
    notes = Column(String(500), nullable=True)

    appointment = relationship("Appointment", viewonly=True)
    items = relationship("PrescriptionItem", viewonly=True)

    __table_args__ = (
        UniqueConstraint("appointment_id", name="uq_prescriptions_appointment"),
    )

    def __repr__(self):
        return f"<Prescription {self.prescription_id} appointment={self.appointment_id}>"


class Medication(Base):
    """Medication catalog entry."""

    __tablename__ = "medications"

    medication_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    unit = Column(String(20), nullable=False)  # mg, ml, tabs

    __table_args__ = (
        UniqueConstraint("name", name="uq_medications_name"),
    )

    def __repr__(self):
        return f"<Medication {self.name} ({self.unit})>"


class PrescriptionItem(Base):
    """Medication line on a prescription (join table with payload)."""

    __tablename__ = "prescription_items"

    prescription_id = Column(
        Integer,
        ForeignKey("prescriptions.prescription_id", name="fk_pxi_rx", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )
    medication_id = Column(
        Integer,
        ForeignKey("medications.medication_id", name="fk_pxi_med", ondelete="RESTRICT", onupdate="CASCADE"),
        primary_key=True,
    )
    dosage = Column(String(50), nullable=False)  # "500mg"
    quantity = Column(Integer, nullable=False)
    instructions = Column(String(255), nullable=True)

    medication = relationship("Medication", viewonly=True)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="chk_qty_pos"),
    )

    def __repr__(self):
        return f"<PrescriptionItem rx={self.prescription_id} med={self.medication_id} x{self.quantity}>"
