"""current_location: acquire the device position and reverse-geocode it."""

from current_location.core.exceptions import (
    AuthorizationDenied,
    ErrorKind,
    GeocodeFailure,
    LocationAcquisitionError,
    LocationDenied,
    LocationFailure,
    LocationUnknown,
)
from current_location.models import Address, DisplayMode, DisplayState, Fix
from current_location.services.controller import LocationAcquisitionController

__all__ = [
    "LocationAcquisitionController",
    "Address",
    "DisplayMode",
    "DisplayState",
    "Fix",
    "ErrorKind",
    "LocationAcquisitionError",
    "LocationUnknown",
    "LocationFailure",
    "LocationDenied",
    "AuthorizationDenied",
    "GeocodeFailure",
]
