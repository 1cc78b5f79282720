"""Base models for rows of the hotel database.

Every mirrored row inherits from :class:`HotelRecord` which provides:

* a required, immutable ``id`` (UUID-like string; integer keys are
  coerced to ``str``),
* ``extra="allow"`` so columns this package does not model survive in
  the record untouched,
* lenient modelled columns: numbers are accepted where text is expected,
  and a value that does not fit its declared type is kept as received
  instead of failing the row,
* frozen instances, so a mirror can only change by replacing rows.

Only a missing or empty ``id`` makes a row unusable.

Write payloads inherit from :class:`RecordCreate`. Validation failures
on write payloads surface as :class:`pyhotel.exceptions.HotelValidationError`
through :func:`parse_payload`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from pyhotel.exceptions import HotelValidationError

_M = TypeVar("_M", bound=BaseModel)


def _keep_unparsed(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    try:
        return handler(value)
    except ValidationError:
        return value


class HotelRecord(BaseModel):
    """A row as returned by the remote store."""

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        if not isinstance(value, str) or not value.strip():
            raise ValueError("id must be a non-empty string")
        return value

    @field_validator("*", mode="wrap")
    @classmethod
    def _lenient_columns(cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo) -> Any:
        if info.field_name == "id":
            return handler(value)
        return _keep_unparsed(value, handler)


class RecordSummary(BaseModel):
    """An embedded, read-only view of a related row."""

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @field_validator("*", mode="wrap")
    @classmethod
    def _lenient_columns(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return _keep_unparsed(value, handler)


class RecordCreate(BaseModel):
    """Payload for inserting one row.

    Unknown fields are passed through to the remote store as-is.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        str_strip_whitespace=True,
    )

    def to_payload(self) -> dict[str, Any]:
        """Fields to send (extras included), omitting the ones the caller never set."""
        return self.model_dump(exclude_unset=True)


def parse_payload(model: type[_M], data: Mapping[str, Any] | BaseModel) -> _M:
    """Validate *data* against *model*.

    Raises
    ------
    HotelValidationError
        When a required field is missing or invalid. ``fields`` lists the
        offending top-level field names.
    """
    if isinstance(data, model):
        return data
    raw = data.model_dump(exclude_unset=True) if isinstance(data, BaseModel) else dict(data)
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        fields = tuple(dict.fromkeys(str(err["loc"][0]) for err in exc.errors() if err.get("loc")))
        names = ", ".join(fields) or model.__name__
        raise HotelValidationError(f"Missing or invalid required data: {names}", fields=fields) from exc
