"""
Derivation of the presentation snapshot from an acquisition session.
"""
from current_location.core.exceptions import LocationDenied
from current_location.models.display import DisplayMode, DisplayState
from current_location.models.session import AcquisitionSession
from current_location.services.address_formatter import format_address

STATUS_SERVICES_DISABLED = "Location Services Disabled"
STATUS_LOCATION_ERROR = "Error Getting Location"
STATUS_SEARCHING = "Searching..."
STATUS_IDLE = "Tap 'Get My Location' to Start"

ADDRESS_SEARCHING = "Searching for Address..."
ADDRESS_ERROR = "Error Finding Address"
ADDRESS_NOT_FOUND = "No Address Found"

LABEL_STOP = "Stop"
LABEL_START = "Get My Location"


def derive_display_state(
    session: AcquisitionSession,
    services_enabled: bool = True,
    decimals: int = 8,
) -> DisplayState:
    """
    Compute what the presentation layer should show for *session*.

    Args:
        session: Current acquisition session
        services_enabled: Whether location services are enabled globally
        decimals: Number of decimal places for coordinate texts

    Returns:
        A fresh DisplayState; the result is never cached
    """
    control_label = LABEL_STOP if session.is_active else LABEL_START

    fix = session.best_fix
    if fix is not None:
        if session.best_address is not None:
            address_text = format_address(session.best_address)
        elif session.geocode_in_flight:
            address_text = ADDRESS_SEARCHING
        elif session.last_geocode_error is not None:
            address_text = ADDRESS_ERROR
        else:
            address_text = ADDRESS_NOT_FOUND

        latitude_text = f"{fix.latitude:.{decimals}f}"
        longitude_text = f"{fix.longitude:.{decimals}f}"
        return DisplayState(
            mode=DisplayMode.HAS_FIX,
            latitude_text=latitude_text,
            longitude_text=longitude_text,
            coordinates_text=f"{latitude_text}, {longitude_text}",
            address_text=address_text,
            status_text="",
            control_label=control_label,
            can_tag=True,
        )

    error = session.last_location_error
    if isinstance(error, LocationDenied) or not services_enabled:
        mode, status_text = DisplayMode.ERROR, STATUS_SERVICES_DISABLED
    elif error is not None:
        mode, status_text = DisplayMode.ERROR, STATUS_LOCATION_ERROR
    elif session.is_active:
        mode, status_text = DisplayMode.SEARCHING, STATUS_SEARCHING
    else:
        mode, status_text = DisplayMode.NO_FIX, STATUS_IDLE

    return DisplayState(
        mode=mode,
        status_text=status_text,
        control_label=control_label,
    )
