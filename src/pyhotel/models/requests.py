"""Pydantic request models for remote procedure calls.

These models provide a consistent "validate → normalize → execute" flow.
They are used internally by :class:`pyhotel.state.store.BookingStore`.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class StayRequest(BaseModel):
    """A room and a stay period, as taken by the booking procedures."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    room_id: str
    check_in: date
    check_out: date

    @field_validator("room_id")
    @classmethod
    def _room_id_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("room_id must be non-empty")
        return value

    @model_validator(mode="after")
    def _check_out_after_check_in(self) -> StayRequest:
        if self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        return self

    def to_args(self) -> dict[str, Any]:
        """Arguments under the names the database functions declare."""
        return {
            "room_id": self.room_id,
            "check_in_date": self.check_in.isoformat(),
            "check_out_date": self.check_out.isoformat(),
        }
