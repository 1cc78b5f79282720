from __future__ import annotations

from datetime import date
from decimal import Decimal

from pyhotel._redact import redact_for_log
from pyhotel.models import Guest


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "apikey": "anon-key",
        "Authorization": "Bearer anon-key",
        "name": "Ana",
        "email": "ana@example.com",
        "nested": {"phone": "+55 11 99999-0000", "document": "123.456.789-00"},
    }

    redacted = redact_for_log(payload)
    assert redacted["apikey"] == "<redacted>"
    assert redacted["Authorization"] == "<redacted>"
    assert redacted["email"] == "<redacted>"
    assert redacted["name"] == "Ana"
    assert redacted["nested"]["phone"] == "<redacted>"
    assert redacted["nested"]["document"] == "<redacted>"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]


def test_redact_for_log_handles_records_and_money() -> None:
    guest = Guest.model_validate({"id": "g1", "name": "Ana", "email": "ana@example.com", "cpf": "000"})

    redacted = redact_for_log([guest, Decimal("150.00"), date(2026, 3, 1)])

    assert redacted[0]["name"] == "Ana"
    assert redacted[0]["email"] == "<redacted>"
    assert redacted[0]["cpf"] == "<redacted>"
    assert redacted[1:] == ["150.00", "2026-03-01"]
