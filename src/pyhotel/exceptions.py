"""Custom exception hierarchy for pyhotel."""

from __future__ import annotations


class HotelError(Exception):
    """Base exception for all pyhotel errors."""


class HotelConfigError(HotelError):
    """Invalid or missing configuration."""


class HotelValidationError(HotelError):
    """A record or request failed validation before any remote call.

    ``fields`` names the offending fields when they are known.
    """

    def __init__(self, message: str, *, fields: tuple[str, ...] = ()) -> None:
        self.fields = fields
        super().__init__(message)


class HotelRemoteError(HotelError):
    """The remote store reported a failure.

    Carries the PostgREST error body fields when the server sent one
    (``code``, ``details``, ``hint``) and the HTTP status when the failure
    came back over HTTP.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "",
        status_code: int | None = None,
        details: str = "",
        hint: str = "",
        endpoint: str = "",
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        self.hint = hint
        self.endpoint = endpoint
        super().__init__(message)


class HotelConnectivityError(HotelRemoteError):
    """The remote store could not be reached.

    Raised when the pre-flight check fails or when the transport itself
    fails (DNS, refused connection, timeout), as opposed to the server
    rejecting the data.
    """
