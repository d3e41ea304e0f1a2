"""
Geocoding service for reverse geocoding location coordinates to structured addresses.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol

from geopy.exc import GeopyError
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim

from current_location.core.config import settings
from current_location.core.exceptions import GeocodeFailure
from current_location.models.location import Address

# Configure logging
logger = logging.getLogger(__name__)

# Nominatim address keys that can stand in for a locality, most specific first
_LOCALITY_KEYS = ("city", "town", "village", "hamlet", "municipality")
_STREET_KEYS = ("road", "pedestrian", "footway", "path")


class GeocodingProvider(Protocol):
    async def reverse_geocode(self, latitude: float, longitude: float) -> List[Address]: ...


def address_from_nominatim(raw: Dict[str, Any]) -> Address:
    """Map a Nominatim ``address`` block onto an Address."""
    def first(keys):
        for key in keys:
            if raw.get(key):
                return raw[key]
        return None

    return Address(
        house_number=raw.get("house_number"),
        street=first(_STREET_KEYS),
        locality=first(_LOCALITY_KEYS),
        admin_area=raw.get("state"),
        postal_code=raw.get("postcode"),
    )


class NominatimGeocodingService:
    def __init__(
        self,
        user_agent: str = settings.GEOCODER_USER_AGENT,
        domain: str = settings.GEOCODER_DOMAIN,
        timeout: int = settings.GEOCODER_TIMEOUT,
        language: Optional[str] = settings.GEOCODER_LANGUAGE,
        min_delay_seconds: float = settings.GEOCODER_MIN_DELAY_SECONDS,
    ):
        # Initialize Nominatim geocoder with a user agent
        self.geocoder = Nominatim(user_agent=user_agent, domain=domain, timeout=timeout)
        self.language = language
        # Throttle only; failures surface to the caller and are never retried
        self._reverse = RateLimiter(
            self.geocoder.reverse,
            min_delay_seconds=min_delay_seconds,
            max_retries=0,
            swallow_exceptions=False,
        )

    async def reverse_geocode(self, latitude: float, longitude: float) -> List[Address]:
        """
        Convert latitude and longitude to candidate addresses.

        The blocking geopy call runs in a worker thread so the caller's
        event loop keeps serving other events.

        Args:
            latitude: Latitude coordinate
            longitude: Longitude coordinate

        Returns:
            Candidate addresses, most specific first; empty if nothing was found

        Raises:
            GeocodeFailure: if the geocoder could not be queried
        """
        logger.info(f"Reverse geocoding coordinates: lat={latitude}, lon={longitude}")
        try:
            locations = await asyncio.to_thread(
                self._reverse,
                (latitude, longitude),
                exactly_one=False,
                language=self.language or False,
                addressdetails=True,
            )
        except GeopyError as e:
            logger.error(f"Error in reverse geocoding: {e}")
            raise GeocodeFailure(latitude, longitude, str(e)) from e

        if not locations:
            logger.warning(f"No address found for coordinates: lat={latitude}, lon={longitude}")
            return []

        addresses = [
            address_from_nominatim((location.raw or {}).get("address", {}))
            for location in locations
        ]
        logger.info(f"Reverse geocoding successful: {len(addresses)} candidate(s)")
        return addresses


# Global instance
geocoding_service = NominatimGeocodingService()
