"""
Presentation layer contract and a logging implementation.
"""
import logging
from typing import Protocol

from current_location.models.display import DisplayState, Notice

logger = logging.getLogger(__name__)

SERVICES_DENIED_NOTICE = Notice(
    title="Location Services Disabled",
    message="Please enable location services for this app in Settings.",
)


class Presenter(Protocol):
    def render(self, state: DisplayState) -> None: ...

    def show_notice(self, notice: Notice) -> None: ...


class LoggingPresenter:
    """Writes every snapshot and notice to the log"""

    def render(self, state: DisplayState) -> None:
        if state.status_text:
            logger.info(f"[{state.control_label}] {state.status_text}")
            return
        address = state.address_text.replace("\n", " / ")
        logger.info(
            f"[{state.control_label}] {state.coordinates_text} | {address}"
        )

    def show_notice(self, notice: Notice) -> None:
        logger.warning(f"{notice.title}: {notice.message}")
