from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pytest

from pyhotel.exceptions import HotelConnectivityError, HotelRemoteError
from pyhotel.notifications import (
    LoggingNotifier,
    NotificationAdapter,
    failure_message,
    success_message,
)
from pyhotel.state.events import Entity, Operation, StoreEvent


@dataclass
class RecordingNotifier:
    successes: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def notify_success(self, message: str) -> None:
        self.successes.append(message)

    def notify_error(self, message: str) -> None:
        self.errors.append(message)


@pytest.mark.parametrize(
    ("entity", "operation", "expected"),
    [
        (Entity.ROOM, Operation.ADD, "Room added successfully"),
        (Entity.GUEST, Operation.UPDATE, "Guest updated successfully"),
        (Entity.ROOM, Operation.REMOVE, "Room deleted successfully"),
        (Entity.BOOKING, Operation.REMOVE, "Booking cancelled successfully"),
        (Entity.PAYMENT, Operation.ADD, "Payment recorded successfully"),
        (Entity.PAYMENT, Operation.UPDATE_STATUS, "Payment status updated"),
    ],
)
def test_success_message(entity: Entity, operation: Operation, expected: str) -> None:
    assert success_message(entity, operation) == expected


def test_reads_and_procedures_have_no_success_message() -> None:
    assert success_message(Entity.ROOM, Operation.LOAD) is None
    assert success_message(Entity.BOOKING, Operation.CALCULATE_TOTAL) is None


@pytest.mark.parametrize(
    ("entity", "operation", "expected"),
    [
        (Entity.ROOM, Operation.LOAD, "Error loading rooms"),
        (Entity.GUEST, Operation.ADD, "Error adding guest"),
        (Entity.BOOKING, Operation.REMOVE, "Error cancelling booking"),
        (Entity.PAYMENT, Operation.ADD, "Error recording payment"),
        (Entity.PAYMENT, Operation.UPDATE_STATUS, "Error updating payment status"),
        (Entity.BOOKING, Operation.CHECK_AVAILABILITY, "Error checking room availability"),
        (Entity.BOOKING, Operation.CALCULATE_TOTAL, "Error calculating booking total"),
    ],
)
def test_failure_message(entity: Entity, operation: Operation, expected: str) -> None:
    assert failure_message(entity, operation) == expected


def test_adapter_notifies_successful_mutations_only() -> None:
    notifier = RecordingNotifier()
    adapter = NotificationAdapter(notifier)

    adapter(StoreEvent(entity=Entity.ROOM, operation=Operation.LOAD, ok=True))
    adapter(StoreEvent(entity=Entity.BOOKING, operation=Operation.CHECK_AVAILABILITY, ok=True))
    adapter(StoreEvent(entity=Entity.ROOM, operation=Operation.ADD, ok=True, record_id="9"))

    assert notifier.successes == ["Room added successfully"]
    assert notifier.errors == []


def test_adapter_reports_failure_with_reason_and_log(caplog: pytest.LogCaptureFixture) -> None:
    notifier = RecordingNotifier()
    adapter = NotificationAdapter(notifier, credentials_present=True)
    error = HotelRemoteError(
        'duplicate key value violates unique constraint "guests_email_key"',
        code="23505",
        status_code=409,
        details="Key (email)=(ana@example.com) already exists.",
    )

    with caplog.at_level(logging.ERROR, logger="pyhotel.notifications"):
        adapter(StoreEvent(entity=Entity.GUEST, operation=Operation.ADD, ok=False, error=error))

    assert notifier.errors == ["Error adding guest: this record already exists (duplicate record)"]
    assert notifier.successes == []
    [record] = caplog.records
    assert record.levelno == logging.ERROR
    assert "Error adding guest" in record.getMessage()
    assert "23505" in record.getMessage()
    assert "'credentials_present': True" in record.getMessage()


def test_adapter_reports_failed_load() -> None:
    notifier = RecordingNotifier()
    adapter = NotificationAdapter(notifier)

    adapter(
        StoreEvent(
            entity=Entity.PAYMENT,
            operation=Operation.LOAD,
            ok=False,
            error=HotelConnectivityError("Request to /payments failed: timeout"),
        )
    )

    assert notifier.errors == ["Error loading payments: connection problem with the database"]


def test_logging_notifier_levels(caplog: pytest.LogCaptureFixture) -> None:
    notifier = LoggingNotifier()

    with caplog.at_level(logging.INFO, logger="pyhotel.notify"):
        notifier.notify_success("Room added successfully")
        notifier.notify_error("Error adding room: unknown error")

    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
        (logging.INFO, "Room added successfully"),
        (logging.WARNING, "Error adding room: unknown error"),
    ]
