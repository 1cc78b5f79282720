from __future__ import annotations

import pytest

from pyhotel.classify import ERROR_MESSAGES, ErrorKind, classify_error, describe_error, error_details
from pyhotel.exceptions import (
    HotelConnectivityError,
    HotelError,
    HotelRemoteError,
    HotelValidationError,
)


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (HotelRemoteError('duplicate key value violates unique constraint "rooms_number_key"', status_code=409), ErrorKind.DUPLICATE),
        (HotelRemoteError('new row for relation "bookings" violates check constraint', status_code=400), ErrorKind.INVALID_DATA),
        (HotelValidationError("Missing or invalid required data: email", fields=("email",)), ErrorKind.INVALID_DATA),
        (HotelConnectivityError("Request to /rooms failed: timeout"), ErrorKind.CONNECTIVITY),
        (HotelRemoteError("Erro de conexão com o banco"), ErrorKind.CONNECTIVITY),
        (HotelError("connection reset by peer"), ErrorKind.CONNECTIVITY),
        (HotelRemoteError("JWT invalid", code="PGRST301", status_code=401), ErrorKind.NOT_CONFIGURED),
        (HotelRemoteError("Bad request", status_code=404), ErrorKind.CLIENT),
        (HotelRemoteError("Internal", status_code=503), ErrorKind.SERVER),
        (HotelRemoteError("Something odd"), ErrorKind.UNKNOWN),
        (RuntimeError("boom"), ErrorKind.UNKNOWN),
    ],
)
def test_classify_error(exc: BaseException, expected: ErrorKind) -> None:
    assert classify_error(exc) is expected


def test_first_matching_rule_wins() -> None:
    # A duplicate reported over a broken connection message is still a duplicate.
    exc = HotelConnectivityError("duplicate request on connection", status_code=500)
    assert classify_error(exc) is ErrorKind.DUPLICATE

    # The not-configured code loses against the connectivity phrase.
    exc = HotelRemoteError("no connection settings", code="PGRST301", status_code=401)
    assert classify_error(exc) is ErrorKind.CONNECTIVITY


def test_describe_error_uses_fixed_wording() -> None:
    assert describe_error(HotelRemoteError("duplicate key")) == "this record already exists (duplicate record)"
    assert describe_error(HotelRemoteError("x", status_code=500)) == "server error (internal database problem)"
    assert set(ERROR_MESSAGES) == set(ErrorKind)


def test_error_details_for_remote_error() -> None:
    exc = HotelRemoteError(
        "duplicate key",
        code="23505",
        status_code=409,
        details="Key (email)=(ana@example.com) already exists.",
        endpoint="/guests",
    )

    details = error_details(exc)

    assert details == {
        "type": "HotelRemoteError",
        "message": "duplicate key",
        "code": "23505",
        "status": 409,
        "details": "Key (email)=(ana@example.com) already exists.",
        "hint": None,
        "endpoint": "/guests",
    }


def test_error_details_lists_invalid_fields() -> None:
    details = error_details(HotelValidationError("Missing", fields=("name", "email")))
    assert details["fields"] == ["name", "email"]
    assert details["type"] == "HotelValidationError"
