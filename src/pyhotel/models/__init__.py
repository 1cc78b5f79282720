"""Typed rows and write payloads of the hotel database."""

from pyhotel.models._base import HotelRecord, RecordCreate, RecordSummary, parse_payload
from pyhotel.models.booking import Booking, BookingCreate, BookingSummary
from pyhotel.models.guest import Guest, GuestCreate, GuestSummary
from pyhotel.models.payment import Payment, PaymentCreate
from pyhotel.models.requests import StayRequest
from pyhotel.models.room import Room, RoomCreate, RoomSummary

__all__ = [
    "Booking",
    "BookingCreate",
    "BookingSummary",
    "Guest",
    "GuestCreate",
    "GuestSummary",
    "HotelRecord",
    "Payment",
    "PaymentCreate",
    "RecordCreate",
    "RecordSummary",
    "Room",
    "RoomCreate",
    "RoomSummary",
    "StayRequest",
    "parse_payload",
]
