"""Store outcome events.

Collection stores never notify users or log failures themselves. Every
operation ends in exactly one :class:`StoreEvent`; subscribers (see
:mod:`pyhotel.notifications`) turn those into messages.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pyhotel.exceptions import HotelError


class Entity(StrEnum):
    ROOM = "room"
    GUEST = "guest"
    BOOKING = "booking"
    PAYMENT = "payment"


class Operation(StrEnum):
    LOAD = "load"
    ADD = "add"
    UPDATE = "update"
    UPDATE_STATUS = "update_status"
    REMOVE = "remove"
    CHECK_AVAILABILITY = "check_availability"
    CALCULATE_TOTAL = "calculate_total"


class LoadState(StrEnum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class StoreEvent(BaseModel):
    """The outcome of one store operation."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    entity: Entity
    operation: Operation
    ok: bool
    record_id: str | None = None
    error: HotelError | None = None
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_mutation(self) -> bool:
        return self.operation in (Operation.ADD, Operation.UPDATE, Operation.UPDATE_STATUS, Operation.REMOVE)
