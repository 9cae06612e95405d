"""Clinic room model."""

from sqlalchemy import Column, Integer, String, Enum, UniqueConstraint
from clinic_booking.database import Base
from clinic_booking.models.enums import RoomType, RoomStatus, enum_values


class Room(Base):
    """Consultation, lab or surgery room."""

    __tablename__ = "rooms"

    room_id = Column(Integer, primary_key=True, autoincrement=True)
    room_number = Column(String(20), nullable=False)
    room_type = Column(Enum(RoomType, name="room_type", values_callable=enum_values), nullable=False)
    status = Column(
        Enum(RoomStatus, name="room_status", values_callable=enum_values),
        nullable=False,
        default=RoomStatus.AVAILABLE,
    )

    __table_args__ = (
        UniqueConstraint("room_number", name="uq_rooms_room_number"),
    )

    def __repr__(self):
        return f"<Room {self.room_number} ({self.room_type})>"
