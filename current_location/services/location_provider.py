"""
Location providers: the source of position fixes for the acquisition controller.

A provider pushes everything it observes (fixes, failures, authorization
changes) through the sink it was attached to; it never touches the
acquisition session directly.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Protocol, Sequence

from current_location.core.config import settings
from current_location.models.events import AuthorizationChanged, FixesReceived, LocationFailed
from current_location.models.location import AuthorizationStatus, Fix

logger = logging.getLogger(__name__)

EventSink = Callable[[object], None]

# Accuracy (meters) of each synthetic fix, worst first
_SYNTHETIC_ACCURACIES = (65.0, 40.0, 20.0, 8.0, 5.0)


class LocationProvider(Protocol):
    def attach(self, sink: EventSink) -> None: ...

    def authorization_status(self) -> AuthorizationStatus: ...

    def request_authorization(self) -> None: ...

    def services_enabled(self) -> bool: ...

    def start(self, desired_accuracy: float) -> None: ...

    def stop(self) -> None: ...


def synthetic_fixes(latitude: float, longitude: float) -> List[Fix]:
    """Fixes that converge on (latitude, longitude) as accuracy improves."""
    fixes = []
    for accuracy in _SYNTHETIC_ACCURACIES:
        # Roughly one meter per 1e-5 degree; stay inside the accuracy radius
        offset = accuracy * 0.5e-5
        fixes.append(Fix(
            latitude=max(-90.0, min(90.0, latitude + offset)),
            longitude=max(-180.0, min(180.0, longitude - offset)),
            horizontal_accuracy=accuracy,
            timestamp=datetime.now(timezone.utc),
        ))
    return fixes


class SimulatedLocationProvider:
    """
    Replays a fixed list of fixes on a timer.

    Each fix is re-stamped with the current time when it is delivered so
    that replayed tracks are never considered stale. When no fixes are
    given, a synthetic sequence around the configured coordinate is used.
    Errors queued with ``fail_with`` are delivered in order after the fixes.
    """

    def __init__(
        self,
        fixes: Optional[Sequence[Fix]] = None,
        authorization: AuthorizationStatus = AuthorizationStatus.GRANTED,
        grant_on_request: bool = True,
        enabled: bool = True,
        interval: float = settings.SIMULATED_INTERVAL_SECONDS,
    ):
        if fixes is None:
            fixes = synthetic_fixes(settings.SIMULATED_LATITUDE, settings.SIMULATED_LONGITUDE)
        self._fixes = list(fixes)
        self._errors: List[Exception] = []
        self._authorization = authorization
        self._grant_on_request = grant_on_request
        self._enabled = enabled
        self.interval = interval
        self.desired_accuracy: Optional[float] = None
        self._sink: Optional[EventSink] = None
        self._task: Optional[asyncio.Task] = None

    def attach(self, sink: EventSink) -> None:
        self._sink = sink

    def authorization_status(self) -> AuthorizationStatus:
        return self._authorization

    def request_authorization(self) -> None:
        """Answer the pending authorization prompt and notify the sink."""
        if self._authorization != AuthorizationStatus.UNDETERMINED:
            return
        if self._grant_on_request:
            self._authorization = AuthorizationStatus.GRANTED
        else:
            self._authorization = AuthorizationStatus.DENIED
        logger.info(f"Simulated authorization answered: {self._authorization.value}")
        self._emit(AuthorizationChanged())

    def services_enabled(self) -> bool:
        return self._enabled

    def fail_with(self, error: Exception) -> None:
        self._errors.append(error)

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, desired_accuracy: float) -> None:
        """Start delivering fixes; must be called from a running event loop."""
        if self.is_running:
            return
        self.desired_accuracy = desired_accuracy
        self._task = asyncio.get_running_loop().create_task(self._replay())
        logger.info(f"Simulated location stream started ({len(self._fixes)} fixes)")

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
            logger.info("Simulated location stream stopped")

    async def _replay(self) -> None:
        for fix in self._fixes:
            await asyncio.sleep(self.interval)
            stamped = fix.model_copy(update={"timestamp": datetime.now(timezone.utc)})
            self._emit(FixesReceived((stamped,)))
        for error in self._errors:
            await asyncio.sleep(self.interval)
            self._emit(LocationFailed(error))

    def _emit(self, event: object) -> None:
        if self._sink is None:
            logger.warning(f"Dropping {type(event).__name__}: no sink attached")
            return
        self._sink(event)
