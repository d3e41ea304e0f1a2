from .address_formatter import format_address
from .display_service import derive_display_state
from .geocoding_service import GeocodingProvider, NominatimGeocodingService
from .location_provider import LocationProvider, SimulatedLocationProvider
from .presenter import LoggingPresenter, Presenter
from .controller import LocationAcquisitionController

__all__ = [
    "format_address",
    "derive_display_state",
    "GeocodingProvider",
    "NominatimGeocodingService",
    "LocationProvider",
    "SimulatedLocationProvider",
    "LoggingPresenter",
    "Presenter",
    "LocationAcquisitionController"
]
