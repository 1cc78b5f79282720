"""Payment models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, Field

from pyhotel.models._base import HotelRecord, RecordCreate
from pyhotel.models.booking import BookingSummary


class Payment(HotelRecord):
    """A payment, read together with its booking (which embeds guest and room)."""

    booking_id: str | None = None
    amount: Decimal | None = None
    method: str | None = None
    status: str | None = None
    updated_at: datetime | None = None
    booking: BookingSummary | None = Field(default=None, validation_alias=AliasChoices("bookings", "booking"))


class PaymentCreate(RecordCreate):
    booking_id: str | None = None
    amount: Decimal | None = None
    method: str | None = None
    status: str | None = None
