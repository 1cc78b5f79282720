"""HTTP transport for the PostgREST API of the hosted database."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Protocol

import aiohttp

from pyhotel._constants import USER_AGENT
from pyhotel._redact import redact_for_log
from pyhotel.config import HotelConfig
from pyhotel.exceptions import HotelConnectivityError, HotelRemoteError

_logger = logging.getLogger(__name__)


class RemoteStore(Protocol):
    """Structural interface of the remote data store.

    Collection stores only talk to this protocol, which makes it easy to
    pass test doubles while keeping the production implementation
    (`PostgrestTransport`) concrete.
    """

    async def list_all(self, table: str, select: str = "*") -> list[dict[str, Any]]: ...

    async def insert(self, table: str, record: Mapping[str, Any], select: str = "*") -> list[dict[str, Any]]: ...

    async def update(
        self,
        table: str,
        record_id: str,
        patch: Mapping[str, Any],
        select: str = "*",
    ) -> list[dict[str, Any]]: ...

    async def delete(self, table: str, record_id: str) -> None: ...

    async def call_procedure(self, name: str, args: Mapping[str, Any]) -> Any: ...

    async def count(self, table: str) -> int: ...


def _id_filter(record_id: str) -> str:
    return f"eq.{record_id}"


def _parse_content_range(value: str | None) -> int | None:
    """Return the total from a ``Content-Range`` header (``0-9/42`` or ``*/0``)."""
    if not value or "/" not in value:
        return None
    total = value.rsplit("/", 1)[1].strip()
    if not total.isdigit():
        return None
    return int(total)


def _remote_error_from_body(endpoint: str, status: int, text: str) -> HotelRemoteError:
    """Build a remote error from a PostgREST error response.

    PostgREST answers failures with ``{"code", "message", "details", "hint"}``;
    anything else is reported with a truncated body.
    """
    try:
        body = json.loads(text) if text else {}
    except json.JSONDecodeError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    message = str(body.get("message") or f"HTTP {status} from {endpoint}: {text[:200]}")
    return HotelRemoteError(
        message,
        code=str(body.get("code") or ""),
        status_code=status,
        details=str(body.get("details") or ""),
        hint=str(body.get("hint") or ""),
        endpoint=endpoint,
    )


class PostgrestTransport:
    """`RemoteStore` implementation speaking the PostgREST HTTP dialect."""

    def __init__(self, config: HotelConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    def _headers(self, *, write: bool = False, prefer: str | None = None) -> dict[str, str]:
        headers: dict[str, str] = {
            "apikey": self._config.api_key,
            "authorization": f"Bearer {self._config.api_key}",
            "accept": "application/json",
            "accept-profile": self._config.schema,
            "user-agent": USER_AGENT,
        }
        if write:
            headers["content-type"] = "application/json"
            headers["content-profile"] = self._config.schema
        if prefer:
            headers["prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, str] | None = None,
        payload: Any = None,
        prefer: str | None = None,
    ) -> tuple[str, Mapping[str, str]]:
        """Send one request and return the body text and response headers.

        Raises `HotelRemoteError` for HTTP errors and
        `HotelConnectivityError` when the server cannot be reached.
        """
        url = f"{self._config.rest_url}{endpoint}"
        write = payload is not None
        headers = self._headers(write=write, prefer=prefer)
        data = json.dumps(payload, default=str) if write else None

        _logger.debug(
            "%s %s params=%s payload=%s",
            method,
            url,
            dict(params or {}),
            redact_for_log(payload),
        )

        try:
            async with self._http.request(method, url, params=params, data=data, headers=headers) as resp:
                text = await resp.text()
                if resp.status >= 400:
                    raise _remote_error_from_body(endpoint, resp.status, text)
                return text, resp.headers
        except HotelRemoteError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            reason = str(exc) or type(exc).__name__
            raise HotelConnectivityError(
                f"Request to {endpoint} failed: {reason}",
                endpoint=endpoint,
            ) from exc

    @staticmethod
    def _decode(endpoint: str, text: str) -> Any:
        if not text.strip():
            return None
        try:
            # Money columns stay exact.
            return json.loads(text, parse_float=Decimal)
        except json.JSONDecodeError as exc:
            raise HotelRemoteError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                code="invalid_json",
                endpoint=endpoint,
            ) from exc

    def _decode_rows(self, endpoint: str, text: str) -> list[dict[str, Any]]:
        decoded = self._decode(endpoint, text)
        if decoded is None:
            return []
        if not isinstance(decoded, list):
            raise HotelRemoteError(
                f"Expected a list of rows from {endpoint}, got {type(decoded).__name__}",
                code="invalid_shape",
                endpoint=endpoint,
            )
        if not all(isinstance(row, dict) for row in decoded):
            raise HotelRemoteError(
                f"Expected a list of rows from {endpoint}, got a non-object element",
                code="invalid_shape",
                endpoint=endpoint,
            )
        return decoded

    async def list_all(self, table: str, select: str = "*") -> list[dict[str, Any]]:
        endpoint = f"/{table}"
        text, _ = await self._request("GET", endpoint, params={"select": select})
        return self._decode_rows(endpoint, text)

    async def insert(self, table: str, record: Mapping[str, Any], select: str = "*") -> list[dict[str, Any]]:
        endpoint = f"/{table}"
        text, _ = await self._request(
            "POST",
            endpoint,
            params={"select": select},
            payload=[dict(record)],
            prefer="return=representation",
        )
        return self._decode_rows(endpoint, text)

    async def update(
        self,
        table: str,
        record_id: str,
        patch: Mapping[str, Any],
        select: str = "*",
    ) -> list[dict[str, Any]]:
        endpoint = f"/{table}"
        text, _ = await self._request(
            "PATCH",
            endpoint,
            params={"id": _id_filter(record_id), "select": select},
            payload=dict(patch),
            prefer="return=representation",
        )
        return self._decode_rows(endpoint, text)

    async def delete(self, table: str, record_id: str) -> None:
        await self._request("DELETE", f"/{table}", params={"id": _id_filter(record_id)})

    async def call_procedure(self, name: str, args: Mapping[str, Any]) -> Any:
        endpoint = f"/rpc/{name}"
        text, _ = await self._request("POST", endpoint, payload=dict(args))
        return self._decode(endpoint, text)

    async def count(self, table: str) -> int:
        """Count the rows of *table* without transferring them."""
        endpoint = f"/{table}"
        _, headers = await self._request(
            "HEAD",
            endpoint,
            params={"select": "id"},
            prefer="count=exact",
        )
        total = _parse_content_range(headers.get("content-range"))
        if total is None:
            raise HotelRemoteError(
                f"Missing row count from {endpoint}",
                code="invalid_shape",
                endpoint=endpoint,
            )
        return total
