"""The four hotel collections and their store factories."""

from __future__ import annotations

from collections.abc import Iterable

from pyhotel._constants import (
    BOOKING_SELECT,
    BOOKINGS_TABLE,
    GUESTS_TABLE,
    PAYMENT_SELECT,
    PAYMENTS_TABLE,
    ROOMS_TABLE,
    SELECT_ALL,
)
from pyhotel._transport import RemoteStore
from pyhotel.models.booking import Booking, BookingCreate
from pyhotel.models.guest import Guest, GuestCreate
from pyhotel.models.payment import Payment, PaymentCreate
from pyhotel.models.room import Room, RoomCreate
from pyhotel.state.events import Entity
from pyhotel.state.store import BookingStore, CollectionSpec, CollectionStore, EventListener, PaymentStore

ROOMS: CollectionSpec[Room] = CollectionSpec(
    entity=Entity.ROOM,
    table=ROOMS_TABLE,
    record=Room,
    create=RoomCreate,
    select=SELECT_ALL,
)

# Guest registration is the one write that checks the connection first.
GUESTS: CollectionSpec[Guest] = CollectionSpec(
    entity=Entity.GUEST,
    table=GUESTS_TABLE,
    record=Guest,
    create=GuestCreate,
    select=SELECT_ALL,
    preflight=True,
)

BOOKINGS: CollectionSpec[Booking] = CollectionSpec(
    entity=Entity.BOOKING,
    table=BOOKINGS_TABLE,
    record=Booking,
    create=BookingCreate,
    select=BOOKING_SELECT,
)

PAYMENTS: CollectionSpec[Payment] = CollectionSpec(
    entity=Entity.PAYMENT,
    table=PAYMENTS_TABLE,
    record=Payment,
    create=PaymentCreate,
    select=PAYMENT_SELECT,
)


def room_store(
    remote: RemoteStore,
    *,
    listeners: Iterable[EventListener] = (),
    serialize: bool = False,
) -> CollectionStore[Room]:
    return CollectionStore(remote, ROOMS, listeners=listeners, serialize=serialize)


def guest_store(
    remote: RemoteStore,
    *,
    listeners: Iterable[EventListener] = (),
    serialize: bool = False,
) -> CollectionStore[Guest]:
    return CollectionStore(remote, GUESTS, listeners=listeners, serialize=serialize)


def booking_store(
    remote: RemoteStore,
    *,
    listeners: Iterable[EventListener] = (),
    serialize: bool = False,
) -> BookingStore:
    return BookingStore(remote, BOOKINGS, listeners=listeners, serialize=serialize)


def payment_store(
    remote: RemoteStore,
    *,
    listeners: Iterable[EventListener] = (),
    serialize: bool = False,
) -> PaymentStore:
    return PaymentStore(remote, PAYMENTS, listeners=listeners, serialize=serialize)
