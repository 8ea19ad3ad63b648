"""Location sources and the resolver that picks between them."""

from .base import FieldSource, GeolocationProvider, Subscription
from .geolocation import (
    IpGeolocationProvider,
    StaticGeolocationProvider,
    UnavailableGeolocationProvider,
)
from .resolver import GEOLOCATION_UNAVAILABLE_MESSAGE, LocationListener, LocationResolver
from .subscriptions import HttpFieldSource, InMemoryRecordStore

__all__ = [
    "GEOLOCATION_UNAVAILABLE_MESSAGE",
    "FieldSource",
    "GeolocationProvider",
    "HttpFieldSource",
    "InMemoryRecordStore",
    "IpGeolocationProvider",
    "LocationListener",
    "LocationResolver",
    "StaticGeolocationProvider",
    "Subscription",
    "UnavailableGeolocationProvider",
]
