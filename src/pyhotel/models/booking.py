"""Booking models."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import AliasChoices, Field

from pyhotel.models._base import HotelRecord, RecordCreate, RecordSummary
from pyhotel.models.guest import GuestSummary
from pyhotel.models.room import RoomSummary


class Booking(HotelRecord):
    """A booking, read together with its guest and room.

    The remote store embeds the related rows under the table names
    (``guests`` / ``rooms``); they are exposed as :attr:`guest` and
    :attr:`room`.
    """

    guest_id: str | None = None
    room_id: str | None = None
    check_in: date | None = None
    check_out: date | None = None
    total_amount: Decimal | None = None
    status: str | None = None
    guest: GuestSummary | None = Field(default=None, validation_alias=AliasChoices("guests", "guest"))
    room: RoomSummary | None = Field(default=None, validation_alias=AliasChoices("rooms", "room"))

    @property
    def nights(self) -> int | None:
        """Length of the stay, when both dates are known."""
        if not isinstance(self.check_in, date) or not isinstance(self.check_out, date):
            return None
        return (self.check_out - self.check_in).days


class BookingSummary(RecordSummary):
    """Booking columns embedded in payments."""

    id: str | None = None
    check_in: date | None = None
    check_out: date | None = None
    total_amount: Decimal | None = None
    guest: GuestSummary | None = Field(default=None, validation_alias=AliasChoices("guests", "guest"))
    room: RoomSummary | None = Field(default=None, validation_alias=AliasChoices("rooms", "room"))


class BookingCreate(RecordCreate):
    """Payload for a booking; carries the foreign keys of guest and room."""

    guest_id: str | None = None
    room_id: str | None = None
    check_in: date | None = None
    check_out: date | None = None
    total_amount: Decimal | None = None
    status: str | None = None
