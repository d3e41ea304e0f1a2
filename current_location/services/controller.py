"""
Location acquisition controller.

Owns the acquisition session and is the only code that mutates it. Location
providers, geocoding requests and user intents talk to the controller by
posting events; ``run()`` applies them one at a time, so handlers never race
each other. Rendering is fire-and-forget: snapshots are scheduled onto the
event loop and the controller never waits for the presenter.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Set

from current_location.core.config import settings
from current_location.core.exceptions import AuthorizationDenied, ErrorKind, error_kind
from current_location.models.display import DisplayState, Notice
from current_location.models.events import (
    AuthorizationChanged,
    FixesReceived,
    GeocodeCompleted,
    LocationFailed,
    StartStopTapped,
)
from current_location.models.location import AuthorizationStatus, Fix
from current_location.models.session import AcquisitionSession, ControllerState
from current_location.services.display_service import derive_display_state
from current_location.services.geocoding_service import GeocodingProvider
from current_location.services.location_provider import LocationProvider
from current_location.services.presenter import SERVICES_DENIED_NOTICE, Presenter

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LocationAcquisitionController:
    """Event-driven state machine: IDLE -> (AUTHORIZING) -> STREAMING -> IDLE"""

    def __init__(
        self,
        location_provider: LocationProvider,
        geocoder: GeocodingProvider,
        presenter: Presenter,
        desired_accuracy: float = settings.DESIRED_ACCURACY_METERS,
        max_fix_age: float = settings.MAX_FIX_AGE_SECONDS,
        follow_up_geocode: bool = settings.GEOCODE_FOLLOW_UP,
        coordinate_decimals: int = settings.COORDINATE_DECIMALS,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.location_provider = location_provider
        self.geocoder = geocoder
        self.presenter = presenter
        self.desired_accuracy = desired_accuracy
        self.max_fix_age = max_fix_age
        self.follow_up_geocode = follow_up_geocode
        self.coordinate_decimals = coordinate_decimals
        self._clock = clock

        self.session = AcquisitionSession()
        self.state = ControllerState.IDLE
        self._queue: asyncio.Queue = asyncio.Queue()
        try:
            self._loop: Optional[asyncio.AbstractEventLoop] = asyncio.get_running_loop()
        except RuntimeError:
            self._loop = None
        self._geocode_tasks: Set[asyncio.Task] = set()

        location_provider.attach(self.post)

    # ── Public API ────────────────────────────────────────────────

    @property
    def display_state(self) -> DisplayState:
        return derive_display_state(
            self.session,
            services_enabled=self.location_provider.services_enabled(),
            decimals=self.coordinate_decimals,
        )

    def start_stop_tapped(self) -> None:
        """User intent from the presentation layer."""
        self.post(StartStopTapped())

    def post(self, event: object) -> None:
        """Queue *event* for the controller.

        Safe to call from other threads once the owning loop is known, i.e.
        the controller was built inside it or ``run()`` has started.
        """
        loop = self._loop
        if loop is not None and loop.is_running():
            try:
                current = asyncio.get_running_loop()
            except RuntimeError:
                current = None
            if current is not loop:
                loop.call_soon_threadsafe(self._queue.put_nowait, event)
                return
        self._queue.put_nowait(event)

    async def run(self) -> None:
        """Apply queued events until cancelled."""
        self._loop = asyncio.get_running_loop()
        logger.info("Location acquisition controller running")
        try:
            while True:
                event = await self._queue.get()
                try:
                    self.handle(event)
                except Exception as e:
                    logger.error(f"Error handling {type(event).__name__}: {e}", exc_info=True)
                finally:
                    self._queue.task_done()
        finally:
            logger.info("Location acquisition controller stopped")

    async def drain(self) -> None:
        """Wait until the events queued so far have been applied.

        Requires ``run()`` to be active on the current loop.
        """
        await self._queue.join()
        # Let scheduled renders reach the presenter
        await asyncio.sleep(0)

    async def wait_idle(self) -> None:
        """Like drain(), but also waits for outstanding geocode requests."""
        while True:
            await self._queue.join()
            if not self._geocode_tasks:
                break
            await asyncio.gather(*list(self._geocode_tasks), return_exceptions=True)
        await asyncio.sleep(0)

    async def close(self) -> None:
        """Stop the stream and abandon outstanding geocode requests."""
        self._stop_stream()
        tasks = list(self._geocode_tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        # Cancelled requests never report back
        self.session.geocode_in_flight = False

    def handle(self, event: object) -> None:
        """Apply a single event to the session. Must run on the owning loop."""
        if isinstance(event, StartStopTapped):
            self._on_start_stop()
        elif isinstance(event, AuthorizationChanged):
            self._on_authorization_changed()
        elif isinstance(event, FixesReceived):
            self._on_fixes(event)
        elif isinstance(event, LocationFailed):
            self._on_location_error(event.error)
        elif isinstance(event, GeocodeCompleted):
            self._on_geocode_completed(event)
        else:
            logger.warning(f"Ignoring unknown event: {event!r}")

    # ── Event handlers ────────────────────────────────────────────

    def _on_start_stop(self) -> None:
        # Authorization is checked in every state, streaming included
        status = self.location_provider.authorization_status()
        if status == AuthorizationStatus.UNDETERMINED:
            logger.info("Requesting location authorization")
            if self.state != ControllerState.STREAMING:
                self.state = ControllerState.AUTHORIZING
            self.location_provider.request_authorization()
            return
        if status in (AuthorizationStatus.RESTRICTED, AuthorizationStatus.DENIED):
            logger.warning(str(AuthorizationDenied(status.value)))
            self._notify(SERVICES_DENIED_NOTICE)
            return

        if self.state == ControllerState.STREAMING:
            self._stop_stream()
            self._render()
            return

        self.session.reset()
        self._start_stream()
        self._render()

    def _on_authorization_changed(self) -> None:
        if self.state != ControllerState.AUTHORIZING:
            logger.debug("Authorization changed outside of a start attempt")
            return
        self.state = ControllerState.IDLE
        self._on_start_stop()

    def _on_fixes(self, event: FixesReceived) -> None:
        if not event.fixes:
            return
        fix = event.fixes[-1]
        logger.debug(f"Fix received: {fix}")

        if self.state != ControllerState.STREAMING:
            return
        age = (self._clock() - fix.timestamp).total_seconds()
        if age > self.max_fix_age:
            logger.debug(f"Discarding stale fix ({age:.1f}s old)")
            return
        if fix.horizontal_accuracy < 0:
            logger.debug("Discarding invalid fix")
            return
        best = self.session.best_fix
        if best is not None and best.horizontal_accuracy <= fix.horizontal_accuracy:
            return

        self.session.best_fix = fix
        self.session.last_location_error = None
        if fix.horizontal_accuracy <= self.desired_accuracy:
            logger.info(f"Desired accuracy reached ({fix.horizontal_accuracy}m)")
            self._stop_stream()

        if not self.session.geocode_in_flight:
            self._start_geocode(fix)
        self._render()

    def _on_location_error(self, error: Exception) -> None:
        if error_kind(error) == ErrorKind.LOCATION_TRANSIENT:
            logger.warning(f"Transient location error ignored: {error}")
            return
        logger.error(f"Location error: {error}")
        self.session.last_location_error = error
        self._stop_stream()
        self._render()

    def _on_geocode_completed(self, event: GeocodeCompleted) -> None:
        session = self.session
        session.last_geocode_error = event.error
        if event.error is None and event.addresses:
            session.best_address = event.addresses[-1]
        else:
            session.best_address = None
        session.geocode_in_flight = False

        if (
            self.follow_up_geocode
            and session.best_fix is not None
            and session.best_fix != session.geocode_target
        ):
            logger.info("Best fix changed during geocoding; looking it up again")
            self._start_geocode(session.best_fix)
        self._render()

    # ── Private helpers ───────────────────────────────────────────

    def _start_stream(self) -> None:
        if not self.location_provider.services_enabled():
            logger.warning("Location services are disabled; stream not started")
            return
        self.location_provider.start(self.desired_accuracy)
        self.state = ControllerState.STREAMING
        self.session.is_active = True

    def _stop_stream(self) -> None:
        if self.state != ControllerState.STREAMING:
            return
        self.location_provider.stop()
        self.state = ControllerState.IDLE
        self.session.is_active = False

    def _start_geocode(self, fix: Fix) -> None:
        self.session.geocode_in_flight = True
        self.session.geocode_target = fix
        task = asyncio.get_running_loop().create_task(self._geocode(fix))
        self._geocode_tasks.add(task)
        task.add_done_callback(self._geocode_tasks.discard)

    async def _geocode(self, fix: Fix) -> None:
        try:
            addresses = await self.geocoder.reverse_geocode(fix.latitude, fix.longitude)
        except Exception as e:
            logger.warning(f"Reverse geocoding failed: {e}")
            self.post(GeocodeCompleted(fix, (), e))
            return
        self.post(GeocodeCompleted(fix, tuple(addresses)))

    def _render(self) -> None:
        asyncio.get_running_loop().call_soon(self.presenter.render, self.display_state)

    def _notify(self, notice: Notice) -> None:
        asyncio.get_running_loop().call_soon(self.presenter.show_notice, notice)
