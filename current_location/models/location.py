from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime, timezone
from enum import Enum


class AuthorizationStatus(str, Enum):
    UNDETERMINED = "undetermined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    GRANTED = "granted"


class Fix(BaseModel):
    """A single position reading as produced by a location provider."""

    latitude: float = Field(..., ge=-90, le=90, description="Latitude")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude")
    # Negative accuracy marks an invalid reading; it is filtered by the
    # controller, not rejected here.
    horizontal_accuracy: float = Field(..., description="Accuracy radius in meters")
    timestamp: datetime

    @validator('timestamp')
    def ensure_aware(cls, v):
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    class Config:
        frozen = True


class Address(BaseModel):
    house_number: Optional[str] = None
    street: Optional[str] = None
    locality: Optional[str] = None
    admin_area: Optional[str] = None
    postal_code: Optional[str] = None

    class Config:
        frozen = True
