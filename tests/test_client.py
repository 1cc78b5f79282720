from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import aiohttp
import pytest

from pyhotel.client import HotelClient
from pyhotel.config import HotelConfig
from pyhotel.exceptions import HotelConfigError, HotelConnectivityError, HotelRemoteError
from pyhotel.state.events import LoadState
from pyhotel.state.store import BookingStore, PaymentStore


@dataclass
class TinyRemote:
    rows: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    count_error: HotelRemoteError | None = None

    async def list_all(self, table: str, select: str = "*") -> list[dict[str, Any]]:
        return list(self.rows.get(table, []))

    async def insert(self, table: str, record: Mapping[str, Any], select: str = "*") -> list[dict[str, Any]]:
        row = {"id": f"{table}-{len(self.rows.get(table, [])) + 1}", **record}
        self.rows.setdefault(table, []).append(row)
        return [row]

    async def update(
        self, table: str, record_id: str, patch: Mapping[str, Any], select: str = "*"
    ) -> list[dict[str, Any]]:
        return []

    async def delete(self, table: str, record_id: str) -> None:
        return None

    async def call_procedure(self, name: str, args: Mapping[str, Any]) -> Any:
        return None

    async def count(self, table: str) -> int:
        if self.count_error is not None:
            raise self.count_error
        return len(self.rows.get(table, []))


@dataclass
class RecordingNotifier:
    successes: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def notify_success(self, message: str) -> None:
        self.successes.append(message)

    def notify_error(self, message: str) -> None:
        self.errors.append(message)


@pytest.mark.asyncio
async def test_missing_credentials_raise_config_error() -> None:
    with pytest.raises(HotelConfigError):
        async with HotelClient(HotelConfig(url="https://abcd.supabase.co")):
            pass


def test_stores_require_open_client() -> None:
    client = HotelClient(HotelConfig(), remote=TinyRemote())
    with pytest.raises(HotelConfigError):
        client.rooms()


@pytest.mark.asyncio
async def test_stores_are_wired_to_the_notifier() -> None:
    remote = TinyRemote(rows={"rooms": [{"id": "1", "number": "101"}]})
    notifier = RecordingNotifier()

    async with HotelClient(HotelConfig(), remote=remote, notifier=notifier) as client:
        rooms = client.rooms()
        other = client.rooms()
        state = await rooms.activate()
        await rooms.add({"number": "102"})

        assert state.status is LoadState.READY
        assert other.state.status is LoadState.UNLOADED
        assert isinstance(client.bookings(), BookingStore)
        assert isinstance(client.payments(), PaymentStore)
        assert [row.id for row in rooms.state.data or ()] == ["rooms-2", "1"]

    assert notifier.successes == ["Room added successfully"]


@pytest.mark.asyncio
async def test_serialize_setting_reaches_stores() -> None:
    async with HotelClient(HotelConfig(serialize_mutations=True), remote=TinyRemote()) as client:
        guests = client.guests()
        assert guests._serialize is True
        assert guests.spec.preflight


@pytest.mark.asyncio
async def test_ping_returns_row_count() -> None:
    remote = TinyRemote(rows={"guests": [{"id": "g1"}, {"id": "g2"}]})
    async with HotelClient(HotelConfig(), remote=remote) as client:
        assert await client.ping() == 2


@pytest.mark.asyncio
async def test_ping_failure_is_connectivity_error() -> None:
    remote = TinyRemote(count_error=HotelRemoteError("permission denied", code="42501", status_code=401))
    async with HotelClient(HotelConfig(), remote=remote) as client:
        with pytest.raises(HotelConnectivityError) as exc_info:
            await client.ping("rooms")

    assert str(exc_info.value) == "Database connection check failed: permission denied"
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_external_session_is_left_open() -> None:
    config = HotelConfig(url="http://127.0.0.1:9", api_key="anon-key")
    async with aiohttp.ClientSession() as http:
        async with HotelClient(config, session=http) as client:
            client.rooms()
        assert not http.closed
