"""Room schemas."""

from pydantic import BaseModel, Field
from typing import Optional

from clinic_booking.models.enums import RoomType, RoomStatus


class RoomCreate(BaseModel):
    room_id: Optional[int] = None
    room_number: str = Field(..., max_length=20)
    room_type: RoomType
    status: RoomStatus = RoomStatus.AVAILABLE

    class Config:
        extra = "forbid"


class RoomUpdate(BaseModel):
    room_id: Optional[int] = None
    room_number: Optional[str] = None
    room_type: Optional[RoomType] = None
    status: Optional[RoomStatus] = None

    class Config:
        extra = "forbid"


class RoomRead(BaseModel):
    room_id: int
    room_number: str
    room_type: RoomType
    status: RoomStatus

    class Config:
        from_attributes = True
        frozen = True
