"""Collection stores: local mirrors of one remote table each.

A store reads its whole table once on activation and afterwards patches
its mirror from the rows the remote store returns for each mutation,
instead of reading the table again. A failed operation never touches
the mirror.

Overlapping mutations are not queued unless the store was created with
``serialize=True``: each patch applies to the mirror current when its
remote call completes.
"""

from __future__ import annotations

import asyncio
import contextlib
import dataclasses
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import UTC, date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, AsyncContextManager, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from pyhotel._constants import CALCULATE_TOTAL_PROCEDURE, CHECK_AVAILABILITY_PROCEDURE
from pyhotel._transport import RemoteStore
from pyhotel.exceptions import HotelConnectivityError, HotelError, HotelRemoteError
from pyhotel.models._base import HotelRecord, RecordCreate, parse_payload
from pyhotel.models.booking import Booking
from pyhotel.models.payment import Payment
from pyhotel.models.requests import StayRequest
from pyhotel.state.events import Entity, LoadState, Operation, StoreEvent
from pyhotel.state.patches import prepend, remove_all, replace_first

_logger = logging.getLogger(__name__)

T = TypeVar("T", bound=HotelRecord)
R = TypeVar("R")

EventListener = Callable[[StoreEvent], None]


async def check_connection(remote: RemoteStore, table: str) -> int:
    """Count the rows of *table* as a pre-flight check.

    Any failure is reported as a `HotelConnectivityError`, so that it is
    told apart from the data errors of the call that follows.
    """
    try:
        return await remote.count(table)
    except HotelConnectivityError:
        raise
    except HotelRemoteError as exc:
        raise HotelConnectivityError(
            f"Database connection check failed: {exc.message}",
            code=exc.code,
            status_code=exc.status_code,
            details=exc.details,
            hint=exc.hint,
            endpoint=exc.endpoint,
        ) from exc


@dataclasses.dataclass(frozen=True)
class CollectionSpec(Generic[T]):
    """What distinguishes one collection from another.

    Parameters
    ----------
    entity : Entity
        Entity kind, used to label events.
    table : str
        Remote table name.
    record : type
        Model every returned row is parsed into.
    create : type
        Model an ``add`` payload must validate against.
    select : str
        Read shape (PostgREST ``select``), also requested on writes.
    preflight : bool
        Check the connection to the table before each insert.
    """

    entity: Entity
    table: str
    record: type[T]
    create: type[RecordCreate]
    select: str = "*"
    preflight: bool = False


@dataclasses.dataclass(frozen=True)
class CollectionState(Generic[T]):
    """Immutable snapshot of a store."""

    status: LoadState = LoadState.UNLOADED
    data: tuple[T, ...] | None = None
    error: HotelError | None = None

    @property
    def is_loading(self) -> bool:
        return self.status in (LoadState.UNLOADED, LoadState.LOADING)

    @property
    def is_error(self) -> bool:
        return self.error is not None


class CollectionStore(Generic[T]):
    """Mirror of one remote table.

    Usage::

        store = CollectionStore(remote, ROOMS)
        await store.activate()
        room = await store.add({"number": "101"})
    """

    def __init__(
        self,
        remote: RemoteStore,
        spec: CollectionSpec[T],
        *,
        listeners: Iterable[EventListener] = (),
        serialize: bool = False,
    ) -> None:
        self._remote = remote
        self._spec = spec
        self._listeners = [*listeners]
        self._serialize = serialize
        self._lock = asyncio.Lock()
        self._state: CollectionState[T] = CollectionState()

    @property
    def spec(self) -> CollectionSpec[T]:
        return self._spec

    @property
    def state(self) -> CollectionState[T]:
        return self._state

    def list(self) -> CollectionState[T]:
        """Return the current snapshot (``status``, ``data``, ``error`` and flags)."""
        return self._state

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Register *listener* for every event; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _emit(self, operation: Operation, *, record_id: str | None = None, error: HotelError | None = None) -> None:
        event = StoreEvent(
            entity=self._spec.entity,
            operation=operation,
            ok=error is None,
            record_id=record_id,
            error=error,
        )
        for listener in tuple(self._listeners):
            try:
                listener(event)
            except Exception:
                _logger.exception("Listener failed for %s %s event", event.entity, event.operation)

    def _succeed(self, operation: Operation, record_id: str | None = None) -> None:
        # A load failure stays on record until the store is replaced.
        if self._state.status is not LoadState.FAILED and self._state.error is not None:
            self._state = dataclasses.replace(self._state, error=None)
        self._emit(operation, record_id=record_id)

    def _fail(self, operation: Operation, exc: HotelError, record_id: str | None = None) -> None:
        _logger.debug("%s %s failed: %s", self._spec.table, operation, exc)
        self._state = dataclasses.replace(self._state, error=exc)
        self._emit(operation, record_id=record_id, error=exc)

    def _apply(self, patch: Callable[[tuple[T, ...] | None], tuple[T, ...] | None]) -> None:
        self._state = dataclasses.replace(self._state, data=patch(self._state.data))

    def _guard(self) -> AsyncContextManager[Any]:
        if self._serialize:
            return self._lock
        return contextlib.nullcontext()

    def _parse_row(self, row: Mapping[str, Any]) -> T:
        try:
            return self._spec.record.model_validate(row)
        except ValidationError as exc:
            raise HotelRemoteError(
                f"Unexpected row shape from {self._spec.table}: {exc.error_count()} error(s)",
                code="invalid_row",
                endpoint=f"/{self._spec.table}",
            ) from exc

    def _single_row(self, rows: Sequence[Mapping[str, Any]], record_id: str | None = None) -> T:
        if not rows:
            if record_id is not None:
                raise HotelRemoteError(
                    f"No {self._spec.entity} with id {record_id}",
                    code="not_found",
                    endpoint=f"/{self._spec.table}",
                )
            raise HotelRemoteError(
                f"Insert into {self._spec.table} returned no row",
                code="empty_result",
                endpoint=f"/{self._spec.table}",
            )
        return self._parse_row(rows[0])

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def activate(self) -> CollectionState[T]:
        """Read the whole table once.

        Only the first call reads; later calls return the current snapshot.
        A failed read is recorded in the state (``status=FAILED``,
        ``data=None``) rather than raised.
        """
        if self._state.status is not LoadState.UNLOADED:
            return self._state

        self._state = CollectionState(status=LoadState.LOADING)
        try:
            rows = await self._remote.list_all(self._spec.table, self._spec.select)
            data = tuple(self._parse_row(row) for row in rows)
        except HotelError as exc:
            self._state = CollectionState(status=LoadState.FAILED, data=None, error=exc)
            _logger.debug("Loading %s failed: %s", self._spec.table, exc)
            self._emit(Operation.LOAD, error=exc)
            return self._state

        self._state = CollectionState(status=LoadState.READY, data=data)
        _logger.debug("Loaded %d row(s) from %s", len(data), self._spec.table)
        self._emit(Operation.LOAD)
        return self._state

    async def add(self, record: Mapping[str, Any] | BaseModel) -> T:
        """Insert one record and put the returned row first in the mirror."""
        async with self._guard():
            try:
                payload = parse_payload(self._spec.create, record)
                if self._spec.preflight:
                    await check_connection(self._remote, self._spec.table)
                rows = await self._remote.insert(self._spec.table, payload.to_payload(), self._spec.select)
                row = self._single_row(rows)
            except HotelError as exc:
                self._fail(Operation.ADD, exc)
                raise

            self._apply(lambda mirror: prepend(mirror, row))
            self._succeed(Operation.ADD, row.id)
            return row

    async def update(
        self,
        record_id: str,
        patch: Mapping[str, Any],
        *,
        operation: Operation = Operation.UPDATE,
    ) -> T:
        """Update one record and swap the returned row in at the same position."""
        async with self._guard():
            try:
                rows = await self._remote.update(self._spec.table, record_id, dict(patch), self._spec.select)
                row = self._single_row(rows, record_id)
            except HotelError as exc:
                self._fail(operation, exc, record_id)
                raise

            self._apply(lambda mirror: replace_first(mirror, record_id, row))
            self._succeed(operation, record_id)
            return row

    async def remove(self, record_id: str) -> None:
        """Delete one record and drop it from the mirror."""
        async with self._guard():
            try:
                await self._remote.delete(self._spec.table, record_id)
            except HotelError as exc:
                self._fail(Operation.REMOVE, exc, record_id)
                raise

            self._apply(lambda mirror: remove_all(mirror, record_id))
            self._succeed(Operation.REMOVE, record_id)

    async def _call_procedure(
        self,
        operation: Operation,
        name: str,
        request: StayRequest | Mapping[str, Any],
        convert: Callable[[Any], R],
    ) -> R:
        """Run a remote procedure and convert its result; the mirror is never touched."""
        try:
            stay = parse_payload(StayRequest, request)
            result = await self._remote.call_procedure(name, stay.to_args())
            value = convert(result)
        except HotelError as exc:
            self._fail(operation, exc)
            raise
        self._emit(operation)
        return value


def _to_bool(result: Any) -> bool:
    if not isinstance(result, bool):
        raise HotelRemoteError(
            f"{CHECK_AVAILABILITY_PROCEDURE} returned a non-boolean value: {result!r}",
            code="invalid_shape",
            endpoint=f"/rpc/{CHECK_AVAILABILITY_PROCEDURE}",
        )
    return result


def _to_decimal(result: Any) -> Decimal:
    if isinstance(result, bool) or result is None:
        raise HotelRemoteError(
            f"{CALCULATE_TOTAL_PROCEDURE} returned a non-numeric value: {result!r}",
            code="invalid_shape",
            endpoint=f"/rpc/{CALCULATE_TOTAL_PROCEDURE}",
        )
    try:
        return Decimal(str(result))
    except InvalidOperation as exc:
        raise HotelRemoteError(
            f"{CALCULATE_TOTAL_PROCEDURE} returned a non-numeric value: {result!r}",
            code="invalid_shape",
            endpoint=f"/rpc/{CALCULATE_TOTAL_PROCEDURE}",
        ) from exc


class BookingStore(CollectionStore[Booking]):
    """Booking mirror plus the availability and pricing procedures."""

    async def check_availability(self, room_id: str, check_in: date | str, check_out: date | str) -> bool:
        """Whether *room_id* is free for the whole stay."""
        return await self._call_procedure(
            Operation.CHECK_AVAILABILITY,
            CHECK_AVAILABILITY_PROCEDURE,
            {"room_id": room_id, "check_in": check_in, "check_out": check_out},
            _to_bool,
        )

    async def calculate_total(self, room_id: str, check_in: date | str, check_out: date | str) -> Decimal:
        """Price of the stay as computed by the database."""
        return await self._call_procedure(
            Operation.CALCULATE_TOTAL,
            CALCULATE_TOTAL_PROCEDURE,
            {"room_id": room_id, "check_in": check_in, "check_out": check_out},
            _to_decimal,
        )


class PaymentStore(CollectionStore[Payment]):
    """Payment mirror with a status shortcut."""

    async def update_status(self, record_id: str, status: str) -> Payment:
        """Set the payment status and stamp ``updated_at``."""
        patch = {"status": status, "updated_at": datetime.now(UTC).isoformat()}
        return await self.update(record_id, patch, operation=Operation.UPDATE_STATUS)
