"""High-level async client for the hotel database."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pyhotel._constants import GUESTS_TABLE
from pyhotel._transport import PostgrestTransport, RemoteStore
from pyhotel.config import HotelConfig
from pyhotel.exceptions import HotelConfigError
from pyhotel.models.guest import Guest
from pyhotel.models.room import Room
from pyhotel.notifications import LoggingNotifier, NotificationAdapter, Notifier
from pyhotel.state.store import BookingStore, CollectionStore, EventListener, PaymentStore, check_connection
from pyhotel.state.tables import booking_store, guest_store, payment_store, room_store

_logger = logging.getLogger(__name__)


class HotelClient:
    """Async client for the hotel database.

    Every call to :meth:`rooms`, :meth:`guests`, :meth:`bookings` or
    :meth:`payments` returns a new store with its own mirror; the caller
    activates it when the view that needs it opens.

    Usage::

        async with HotelClient(HotelConfig.from_env()) as client:
            rooms = client.rooms()
            await rooms.activate()
            await rooms.add({"number": "101", "type": "double"})
    """

    def __init__(
        self,
        config: HotelConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        remote: RemoteStore | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._injected_remote = remote
        self._remote: RemoteStore | None = None
        self._notifier: Notifier = notifier if notifier is not None else LoggingNotifier()
        self._adapter = NotificationAdapter(self._notifier, credentials_present=config.credentials_present)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> HotelClient:
        if self._injected_remote is not None:
            self._remote = self._injected_remote
            return self

        if not self._config.credentials_present:
            raise HotelConfigError("Database URL and API key are required (set SUPABASE_URL and SUPABASE_ANON_KEY)")
        if self._http_session is None:
            timeout = aiohttp.ClientTimeout(total=self._config.request_timeout)
            self._http_session = aiohttp.ClientSession(timeout=timeout)
        self._remote = PostgrestTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._remote = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_remote(self) -> RemoteStore:
        if self._remote is None:
            raise HotelConfigError("Client not initialized. Use 'async with HotelClient(...) as client:'")
        return self._remote

    def _listeners(self) -> tuple[EventListener, ...]:
        return (self._adapter,)

    # ------------------------------------------------------------------
    # Stores
    # ------------------------------------------------------------------

    def rooms(self) -> CollectionStore[Room]:
        return room_store(
            self._require_remote(),
            listeners=self._listeners(),
            serialize=self._config.serialize_mutations,
        )

    def guests(self) -> CollectionStore[Guest]:
        return guest_store(
            self._require_remote(),
            listeners=self._listeners(),
            serialize=self._config.serialize_mutations,
        )

    def bookings(self) -> BookingStore:
        return booking_store(
            self._require_remote(),
            listeners=self._listeners(),
            serialize=self._config.serialize_mutations,
        )

    def payments(self) -> PaymentStore:
        return payment_store(
            self._require_remote(),
            listeners=self._listeners(),
            serialize=self._config.serialize_mutations,
        )

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    async def ping(self, table: str = GUESTS_TABLE) -> int:
        """Check that *table* is reachable and return its row count.

        Raises
        ------
        HotelConnectivityError
            When the check fails, whatever the underlying cause.
        """
        total = await check_connection(self._require_remote(), table)
        _logger.debug("Connection check on %s ok (%d rows)", table, total)
        return total
