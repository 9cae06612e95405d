"""Doctor, specialty and the doctor-specialty join table."""

from sqlalchemy import Column, Integer, String, Date, DateTime, Boolean, ForeignKey, Index, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from clinic_booking.database import Base


class Doctor(Base):
    """Doctor employed by the clinic."""

    __tablename__ = "doctors"

    doctor_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(100), nullable=False)
    phone = Column(String(25), nullable=False)
    license_no = Column(String(50), nullable=False)
    hire_date = Column(Date, nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    # Read-only navigation; the store owns every write
    specialties = relationship(
        "Specialty", secondary="doctor_specialty", viewonly=True, order_by="Specialty.name"
    )
    appointments = relationship("Appointment", viewonly=True, order_by="Appointment.start_time")

    __table_args__ = (
        UniqueConstraint("email", name="uq_doctors_email"),
        UniqueConstraint("phone", name="uq_doctors_phone"),
        UniqueConstraint("license_no", name="uq_doctors_license_no"),
        Index("ix_doctors_name", "last_name", "first_name"),
    )

    def __repr__(self):
        return f"<Doctor {self.doctor_id} {self.first_name} {self.last_name}>"


class Specialty(Base):
    """Medical specialty (e.g. Cardiology, Dermatology)."""

    __tablename__ = "specialties"

    specialty_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(String(255), nullable=True)

    doctors = relationship(
        "Doctor", secondary="doctor_specialty", viewonly=True, order_by="Doctor.last_name"
    )

    __table_args__ = (
        UniqueConstraint("name", name="uq_specialties_name"),
    )

    def __repr__(self):
        return f"<Specialty {self.name}>"


class DoctorSpecialty(Base):
    """Many-to-many join between doctors and specialties."""

    __tablename__ = "doctor_specialty"

    doctor_id = Column(
        Integer,
        ForeignKey("doctors.doctor_id", name="fk_ds_doctor", ondelete="CASCADE", onupdate="CASCADE"),
        primary_key=True,
    )
    specialty_id = Column(
        Integer,
        ForeignKey("specialties.specialty_id", name="fk_ds_specialty", ondelete="RESTRICT", onupdate="CASCADE"),
        primary_key=True,
    )

    def __repr__(self):
        return f"<DoctorSpecialty doctor={self.doctor_id} specialty={self.specialty_id}>"
