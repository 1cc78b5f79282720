"""Guest models."""

from __future__ import annotations

from pydantic import field_validator

from pyhotel.models._base import HotelRecord, RecordCreate, RecordSummary


class Guest(HotelRecord):
    """A guest of the hotel."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None


class GuestSummary(RecordSummary):
    """Guest columns embedded in bookings and payments."""

    id: str | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None


class GuestCreate(RecordCreate):
    """Payload for registering a guest.

    ``name`` and ``email`` are mandatory; a guest without them is
    rejected before anything is sent to the remote store.
    """

    name: str
    email: str
    phone: str | None = None

    @field_validator("name", "email")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must be non-empty")
        return value
