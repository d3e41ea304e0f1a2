from pydantic import BaseModel
from typing import Optional
from enum import Enum

from current_location.models.location import Address, Fix


class ControllerState(str, Enum):
    IDLE = "idle"
    AUTHORIZING = "authorizing"
    STREAMING = "streaming"


class AcquisitionSession(BaseModel):
    """Mutable acquisition state, owned by a single controller."""

    best_fix: Optional[Fix] = None
    last_location_error: Optional[Exception] = None
    is_active: bool = False
    geocode_in_flight: bool = False
    # Fix the most recent geocode request was started for
    geocode_target: Optional[Fix] = None
    best_address: Optional[Address] = None
    last_geocode_error: Optional[Exception] = None

    def reset(self) -> None:
        """Forget everything learned by the previous acquisition attempt.

        In-flight bookkeeping survives: a running request cannot be aborted
        and its completion still has to clear the flag.
        """
        self.best_fix = None
        self.last_location_error = None
        self.best_address = None
        self.last_geocode_error = None

    class Config:
        arbitrary_types_allowed = True
        validate_assignment = True
