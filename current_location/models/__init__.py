from .location import Address, AuthorizationStatus, Fix
from .session import AcquisitionSession, ControllerState
from .display import DisplayMode, DisplayState, Notice
from .events import (
    AuthorizationChanged,
    FixesReceived,
    GeocodeCompleted,
    LocationFailed,
    StartStopTapped,
)

__all__ = [
    "Address",
    "AuthorizationStatus",
    "Fix",
    "AcquisitionSession",
    "ControllerState",
    "DisplayMode",
    "DisplayState",
    "Notice",
    "AuthorizationChanged",
    "FixesReceived",
    "GeocodeCompleted",
    "LocationFailed",
    "StartStopTapped"
]
