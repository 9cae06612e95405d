"""Appointment model."""

from sqlalchemy import Column, Integer, String, DateTime, Enum, ForeignKey, CheckConstraint, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from clinic_booking.database import Base
from clinic_booking.models.enums import AppointmentStatus, enum_values


class Appointment(Base):
    """Appointment between a patient and a doctor, optionally in a room."""

    __tablename__ = "appointments"

    appointment_id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(
        Integer,
        ForeignKey("patients.patient_id", name="fk_appt_patient", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
    )
    doctor_id = Column(
        Integer,
        ForeignKey("doctors.doctor_id", name="fk_appt_doctor", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
    )
    room_id = Column(
        Integer,
        ForeignKey("rooms.room_id", name="fk_appt_room", ondelete="SET NULL", onupdate="CASCADE"),
        nullable=True,
    )
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    status = Column(
        Enum(AppointmentStatus, name="appointment_status", values_callable=enum_values),
        nullable=False,
        default=AppointmentStatus.SCHEDULED,
    )
    reason = Column(String(255), nullable=True)

    patient = relationship("Patient", viewonly=True)
    doctor = relationship("Doctor", viewonly=True)
    room = relationship("Room", viewonly=True)
    prescription = relationship("Prescription", viewonly=True, uselist=False)
    invoice = relationship("Invoice", viewonly=True, uselist=False)

    __table_args__ = (
        # Exact duplicate slot only; overlap detection is booking logic
        UniqueConstraint("doctor_id", "start_time", name="uq_doctor_start"),
        CheckConstraint("end_time > start_time", name="chk_time_valid"),
        Index("ix_appt_patient_time", "patient_id", "start_time"),
        Index("ix_appt_doctor_time", "doctor_id", "start_time"),
    )

    def __repr__(self):
        return f"<Appointment {self.appointment_id} doctor={self.doctor_id} at {self.start_time}>"
