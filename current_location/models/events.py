"""Messages posted into the acquisition controller's queue."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from current_location.models.location import Address, Fix


@dataclass(frozen=True)
class StartStopTapped:
    """The user asked to start (or stop) acquiring a location."""


@dataclass(frozen=True)
class AuthorizationChanged:
    """The platform reported a new authorization status."""


@dataclass(frozen=True)
class FixesReceived:
    fixes: Tuple[Fix, ...]


@dataclass(frozen=True)
class LocationFailed:
    error: Exception


@dataclass(frozen=True)
class GeocodeCompleted:
    fix: Fix
    addresses: Tuple[Address, ...] = field(default_factory=tuple)
    error: Optional[Exception] = None
