"""Error kinds raised and recorded during location acquisition."""

from enum import Enum


class ErrorKind(str, Enum):
    LOCATION_TRANSIENT = "location_transient"
    LOCATION_FATAL = "location_fatal"
    AUTHORIZATION_DENIED = "authorization_denied"
    GEOCODE_FAILURE = "geocode_failure"


class LocationAcquisitionError(Exception):
    """Base exception for all location acquisition errors."""

    kind: ErrorKind = ErrorKind.LOCATION_FATAL


class LocationUnknown(LocationAcquisitionError):
    """The provider could not determine a position yet; it keeps trying."""

    kind = ErrorKind.LOCATION_TRANSIENT

    def __init__(self, message: str = "Location is currently unknown"):
        super().__init__(message)


class LocationFailure(LocationAcquisitionError):
    """The provider failed and the stream cannot continue."""

    kind = ErrorKind.LOCATION_FATAL


class LocationDenied(LocationFailure):
    """The provider refused to deliver positions to this application."""

    def __init__(self, message: str = "Access to location services was denied"):
        super().__init__(message)


class AuthorizationDenied(LocationAcquisitionError):
    """Authorization is restricted or denied; no stream can be started."""

    kind = ErrorKind.AUTHORIZATION_DENIED

    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Location authorization is {status}")


class GeocodeFailure(LocationAcquisitionError):
    """Reverse geocoding of a fix failed."""

    kind = ErrorKind.GEOCODE_FAILURE

    def __init__(self, latitude: float, longitude: float, detail: str):
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(
            f"Reverse geocoding failed for ({latitude}, {longitude}): {detail}"
        )


def error_kind(error: BaseException) -> ErrorKind:
    """Classify *error*; anything not raised by this package is fatal."""
    if isinstance(error, LocationAcquisitionError):
        return error.kind
    return ErrorKind.LOCATION_FATAL
