"""Room models."""

from __future__ import annotations

from decimal import Decimal

from pyhotel.models._base import HotelRecord, RecordCreate, RecordSummary


class Room(HotelRecord):
    """A room of the hotel."""

    number: int | str | None = None
    """Room number as shown to staff (e.g. ``"101"``)."""
    type: str | None = None
    """Room category (e.g. ``"single"``, ``"suite"``)."""
    status: str | None = None
    """Housekeeping / occupancy status."""
    rate: Decimal | None = None
    """Nightly rate."""


class RoomSummary(RecordSummary):
    """Room columns embedded in bookings and payments."""

    id: str | None = None
    number: int | str | None = None
    type: str | None = None
    status: str | None = None
    rate: Decimal | None = None


class RoomCreate(RecordCreate):
    number: int | str | None = None
    type: str | None = None
    status: str | None = None
    rate: Decimal | None = None
