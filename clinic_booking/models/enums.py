"""Enumerated column domains shared by models and schemas."""

import enum


class Sex(str, enum.Enum):
    F = "F"
    M = "M"
    X = "X"


class RoomType(str, enum.Enum):
    CONSULTATION = "Consultation"
    LAB = "Lab"
    SURGERY = "Surgery"
    OTHER = "Other"


class RoomStatus(str, enum.Enum):
    AVAILABLE = "Available"
    UNAVAILABLE = "Unavailable"


class AppointmentStatus(str, enum.Enum):
    """Scheduled -> CheckedIn -> Completed, or Cancelled / NoShow.

    Transitions are not validated; any value may replace any other.
    """
    SCHEDULED = "Scheduled"
    CHECKED_IN = "CheckedIn"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    NO_SHOW = "NoShow"


class InvoiceStatus(str, enum.Enum):
    UNPAID = "Unpaid"
    PARTIALLY_PAID = "PartiallyPaid"
    PAID = "Paid"
    VOIDED = "Voided"


class PaymentMethod(str, enum.Enum):
    CASH = "Cash"
    CARD = "Card"
    MOBILE_MONEY = "MobileMoney"
    INSURANCE = "Insurance"


def enum_values(enum_cls):
    """Persist enum values ("CheckedIn"), not member names ("CHECKED_IN")."""
    return [member.value for member in enum_cls]
