"""pyhotel - Async Python client for the hotel-management database."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyhotel")
except PackageNotFoundError:
    __version__ = "0+local"
from pyhotel.classify import ErrorKind, classify_error, describe_error
from pyhotel.client import HotelClient
from pyhotel.config import HotelConfig
from pyhotel.exceptions import (
    HotelConfigError,
    HotelConnectivityError,
    HotelError,
    HotelRemoteError,
    HotelValidationError,
)
from pyhotel.models import (
    Booking,
    BookingCreate,
    Guest,
    GuestCreate,
    Payment,
    PaymentCreate,
    Room,
    RoomCreate,
    StayRequest,
)
from pyhotel.notifications import LoggingNotifier, NotificationAdapter, Notifier
from pyhotel.state.events import Entity, LoadState, Operation, StoreEvent
from pyhotel.state.store import BookingStore, CollectionSpec, CollectionState, CollectionStore, PaymentStore

__all__ = [
    "__version__",
    "Booking",
    "BookingCreate",
    "BookingStore",
    "CollectionSpec",
    "CollectionState",
    "CollectionStore",
    "Entity",
    "ErrorKind",
    "Guest",
    "GuestCreate",
    "HotelClient",
    "HotelConfig",
    "HotelConfigError",
    "HotelConnectivityError",
    "HotelError",
    "HotelRemoteError",
    "HotelValidationError",
    "LoadState",
    "LoggingNotifier",
    "NotificationAdapter",
    "Notifier",
    "Operation",
    "Payment",
    "PaymentCreate",
    "PaymentStore",
    "Room",
    "RoomCreate",
    "StayRequest",
    "StoreEvent",
    "classify_error",
    "describe_error",
]
