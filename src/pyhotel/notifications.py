"""User-facing notifications for store events.

Stores emit :class:`pyhotel.state.events.StoreEvent` values and know
nothing about presentation. :class:`NotificationAdapter` subscribes to
those events, picks the message for each one, logs failures with their
diagnostic detail and forwards the message to a :class:`Notifier`
(a toast layer, a chat bot, or the default :class:`LoggingNotifier`).
"""

from __future__ import annotations

import logging
from typing import Protocol

from pyhotel._redact import redact_for_log
from pyhotel.classify import describe_error, error_details
from pyhotel.state.events import Entity, Operation, StoreEvent

_logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Fire-and-forget sink for user-facing messages."""

    def notify_success(self, message: str) -> None: ...

    def notify_error(self, message: str) -> None: ...


class LoggingNotifier:
    """Notifier that writes messages to a logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("pyhotel.notify")

    def notify_success(self, message: str) -> None:
        self._logger.info(message)

    def notify_error(self, message: str) -> None:
        self._logger.warning(message)


_LABELS: dict[Entity, tuple[str, str]] = {
    Entity.ROOM: ("room", "rooms"),
    Entity.GUEST: ("guest", "guests"),
    Entity.BOOKING: ("booking", "bookings"),
    Entity.PAYMENT: ("payment", "payments"),
}

_SUCCESS: dict[Operation, str] = {
    Operation.ADD: "{Label} added successfully",
    Operation.UPDATE: "{Label} updated successfully",
    Operation.UPDATE_STATUS: "{Label} status updated",
    Operation.REMOVE: "{Label} deleted successfully",
}

_FAILURE: dict[Operation, str] = {
    Operation.LOAD: "Error loading {plural}",
    Operation.ADD: "Error adding {label}",
    Operation.UPDATE: "Error updating {label}",
    Operation.UPDATE_STATUS: "Error updating {label} status",
    Operation.REMOVE: "Error deleting {label}",
    Operation.CHECK_AVAILABILITY: "Error checking room availability",
    Operation.CALCULATE_TOTAL: "Error calculating {label} total",
}

# (success, failure) wording that differs from the defaults above.
_OVERRIDES: dict[tuple[Entity, Operation], tuple[str, str]] = {
    (Entity.BOOKING, Operation.REMOVE): ("Booking cancelled successfully", "Error cancelling booking"),
    (Entity.PAYMENT, Operation.ADD): ("Payment recorded successfully", "Error recording payment"),
}


def _format(template: str, entity: Entity) -> str:
    label, plural = _LABELS[entity]
    return template.format(label=label, Label=label.capitalize(), plural=plural)


def success_message(entity: Entity, operation: Operation) -> str | None:
    """Message for a successful operation, or ``None`` when nothing is shown."""
    override = _OVERRIDES.get((entity, operation))
    if override is not None:
        return override[0]
    template = _SUCCESS.get(operation)
    return _format(template, entity) if template else None


def failure_message(entity: Entity, operation: Operation) -> str:
    """Headline for a failed operation (without the classified reason)."""
    override = _OVERRIDES.get((entity, operation))
    if override is not None:
        return override[1]
    return _format(_FAILURE[operation], entity)


class NotificationAdapter:
    """Turns store events into notifications; subscribe it to a store.

    Successful mutations produce one success message. Every failure
    produces one error message carrying the classified reason, plus an
    ERROR log line with the diagnostic fields of the exception. Loads and
    procedure calls that succeed stay silent.
    """

    def __init__(self, notifier: Notifier, *, credentials_present: bool | None = None) -> None:
        self._notifier = notifier
        self._credentials_present = credentials_present

    def __call__(self, event: StoreEvent) -> None:
        if event.ok:
            message = success_message(event.entity, event.operation)
            if message is not None and event.is_mutation:
                self._notifier.notify_success(message)
            return

        headline = failure_message(event.entity, event.operation)
        details = error_details(event.error) if event.error is not None else {}
        if self._credentials_present is not None:
            details["credentials_present"] = self._credentials_present
        _logger.error("%s (id=%s): %s", headline, event.record_id, redact_for_log(details))

        reason = describe_error(event.error) if event.error is not None else describe_error(Exception())
        self._notifier.notify_error(f"{headline}: {reason}")
