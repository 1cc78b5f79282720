"""Best-effort classification of failures into user-facing reasons.

The classification only picks the wording shown to the user. It never
decides whether an operation failed or what happens next.
"""

from __future__ import annotations

from enum import StrEnum

from pyhotel._constants import NOT_CONFIGURED_CODE
from pyhotel.exceptions import HotelConnectivityError, HotelRemoteError, HotelValidationError


class ErrorKind(StrEnum):
    DUPLICATE = "duplicate"
    INVALID_DATA = "invalid_data"
    CONNECTIVITY = "connectivity"
    NOT_CONFIGURED = "not_configured"
    CLIENT = "client"
    SERVER = "server"
    UNKNOWN = "unknown"


ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.DUPLICATE: "this record already exists (duplicate record)",
    ErrorKind.INVALID_DATA: "invalid data (violates database rules)",
    ErrorKind.CONNECTIVITY: "connection problem with the database",
    ErrorKind.NOT_CONFIGURED: "database is not configured correctly",
    ErrorKind.CLIENT: "client error (invalid request)",
    ErrorKind.SERVER: "server error (internal database problem)",
    ErrorKind.UNKNOWN: "unknown error",
}

_CONNECTIVITY_PHRASES = ("connection", "conexão")


def classify_error(exc: BaseException) -> ErrorKind:
    """Pick the reason to show for *exc*; the first matching rule wins."""
    message = str(exc).lower()
    code = getattr(exc, "code", "") or ""
    status = getattr(exc, "status_code", None)

    if "duplicate" in message:
        return ErrorKind.DUPLICATE
    if "violates" in message or isinstance(exc, HotelValidationError):
        return ErrorKind.INVALID_DATA
    if isinstance(exc, HotelConnectivityError) or any(phrase in message for phrase in _CONNECTIVITY_PHRASES):
        return ErrorKind.CONNECTIVITY
    if code == NOT_CONFIGURED_CODE:
        return ErrorKind.NOT_CONFIGURED
    if isinstance(status, int):
        if 400 <= status < 500:
            return ErrorKind.CLIENT
        if status >= 500:
            return ErrorKind.SERVER
    return ErrorKind.UNKNOWN


def describe_error(exc: BaseException) -> str:
    """User-facing reason for *exc*."""
    return ERROR_MESSAGES[classify_error(exc)]


def error_details(exc: BaseException) -> dict[str, object]:
    """Diagnostic fields of *exc* for the operational log."""
    details: dict[str, object] = {"type": type(exc).__name__, "message": str(exc)}
    if isinstance(exc, HotelRemoteError):
        details.update(
            code=exc.code or None,
            status=exc.status_code,
            details=exc.details or None,
            hint=exc.hint or None,
            endpoint=exc.endpoint or None,
        )
    if isinstance(exc, HotelValidationError) and exc.fields:
        details["fields"] = list(exc.fields)
    return details
