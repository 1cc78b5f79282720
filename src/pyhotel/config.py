"""Client configuration for pyhotel."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _first_env(env: Mapping[str, str], *keys: str) -> str | None:
    for key in keys:
        value = env.get(key)
        if value:
            return value
    return None


@dataclasses.dataclass(frozen=True)
class HotelConfig:
    """Client configuration.

    Parameters
    ----------
    url : str
        Project URL of the hosted database (e.g.
        ``"https://abcd.supabase.co"``). The REST API lives under
        ``/rest/v1``.
    api_key : str
        Anonymous (or service) API key. Sent both as ``apikey`` and as the
        bearer token.
    schema : str
        Database schema exposed through the REST API.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    serialize_mutations : bool
        Run the mutations of one collection store one at a time.
        When ``False`` (the default) overlapping mutations each patch the
        mirror as they complete.
    """

    url: str = ""
    api_key: str = ""
    schema: str = "public"
    request_timeout: float = 30.0
    serialize_mutations: bool = False

    @property
    def rest_url(self) -> str:
        """Base URL of the REST API."""
        return f"{self.url.rstrip('/')}/rest/v1"

    @property
    def credentials_present(self) -> bool:
        """Whether both the URL and the API key are set."""
        return bool(self.url) and bool(self.api_key)

    @classmethod
    def from_env(cls, **overrides: Any) -> HotelConfig:
        """Create configuration from environment variables.

        Reads ``SUPABASE_URL`` and ``SUPABASE_ANON_KEY`` (falling back to
        the ``NEXT_PUBLIC_`` prefixed names used by the web frontend) and the
        optional ``HOTEL_*`` variables. Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        HotelConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        url = _first_env(env, "SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL")
        if url is not None:
            config_kwargs["url"] = url
        api_key = _first_env(env, "SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY")
        if api_key is not None:
            config_kwargs["api_key"] = api_key

        schema = env.get("HOTEL_SCHEMA")
        if schema:
            config_kwargs["schema"] = schema

        # request_timeout is numeric, handle separately
        timeout_env = env.get("HOTEL_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = float(timeout_env)

        if "serialize_mutations" not in overrides:
            config_kwargs["serialize_mutations"] = _env_bool(env.get("HOTEL_SERIALIZE_MUTATIONS"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
