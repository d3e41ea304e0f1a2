from pydantic import BaseModel
from enum import Enum


class DisplayMode(str, Enum):
    NO_FIX = "no_fix"
    SEARCHING = "searching"
    ERROR = "error"
    HAS_FIX = "has_fix"


class DisplayState(BaseModel):
    """Snapshot handed to the presentation layer."""

    mode: DisplayMode
    latitude_text: str = ""
    longitude_text: str = ""
    coordinates_text: str = ""
    address_text: str = ""
    status_text: str = ""
    control_label: str
    can_tag: bool = False

    class Config:
        frozen = True


class Notice(BaseModel):
    """Blocking message the presentation layer must show to the user."""

    title: str
    message: str

    class Config:
        frozen = True
