"""Mirror patch functions.

Each mutation, once the remote store confirms it, turns into one of these
pure functions applied to the mirror value current at completion time.
They never mutate their input.
"""

from __future__ import annotations

from typing import TypeVar

from pyhotel.models._base import HotelRecord

T = TypeVar("T", bound=HotelRecord)


def prepend(mirror: tuple[T, ...] | None, row: T) -> tuple[T, ...]:
    """Newest first. An unloaded mirror becomes a one-row mirror."""
    if mirror is None:
        return (row,)
    return (row, *mirror)


def replace_first(mirror: tuple[T, ...] | None, record_id: str, row: T) -> tuple[T, ...] | None:
    """Replace the first row with *record_id*, keeping its position."""
    if mirror is None:
        return None
    for index, current in enumerate(mirror):
        if current.id == record_id:
            return (*mirror[:index], row, *mirror[index + 1 :])
    return mirror


def remove_all(mirror: tuple[T, ...] | None, record_id: str) -> tuple[T, ...] | None:
    """Drop every row with *record_id*; the rest keep their relative order."""
    if mirror is None:
        return None
    return tuple(row for row in mirror if row.id != record_id)
