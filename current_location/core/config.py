from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Application
    PROJECT_NAME: str = "Current Location"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Acquisition
    DESIRED_ACCURACY_METERS: float = 10.0
    MAX_FIX_AGE_SECONDS: float = 5.0
    COORDINATE_DECIMALS: int = 8
    GEOCODE_FOLLOW_UP: bool = True

    # Reverse geocoding (Nominatim)
    GEOCODER_USER_AGENT: str = "current-location"
    GEOCODER_DOMAIN: str = "nominatim.openstreetmap.org"
    GEOCODER_TIMEOUT: int = 10  # seconds
    GEOCODER_LANGUAGE: Optional[str] = None
    GEOCODER_MIN_DELAY_SECONDS: float = 1.0  # Nominatim usage policy

    # Simulated location source used by main.py
    SIMULATED_LATITUDE: float = 48.8584
    SIMULATED_LONGITUDE: float = 2.2945
    SIMULATED_INTERVAL_SECONDS: float = 1.0

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
