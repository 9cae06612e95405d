"""Patient model."""

from sqlalchemy import Column, Integer, String, Date, DateTime, Enum, Index, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from clinic_booking.database import Base
from clinic_booking.models.enums import Sex, enum_values


class Patient(Base):
    """Patient registered with the clinic."""

    __tablename__ = "patients"

    patient_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    sex = Column(Enum(Sex, name="patient_sex", values_callable=enum_values), nullable=False)

    # email and national_id are optional; NULLs never collide on a unique key
    email = Column(String(100), nullable=True)
    phone = Column(String(25), nullable=False)
    national_id = Column(String(50), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    appointments = relationship("Appointment", viewonly=True, order_by="Appointment.start_time")

    __table_args__ = (
        UniqueConstraint("email", name="uq_patients_email"),
        UniqueConstraint("phone", name="uq_patients_phone"),
        UniqueConstraint("national_id", name="uq_patients_national_id"),
        Index("ix_patients_name", "last_name", "first_name"),
    )

    def __repr__(self):
        return f"<Patient {self.patient_id} {self.first_name} {self.last_name}>"
