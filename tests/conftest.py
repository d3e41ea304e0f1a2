"""Shared test fixtures: fake collaborators and a fixed clock."""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone

import pytest

from current_location.models.location import Address, AuthorizationStatus, Fix

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def make_fix(accuracy: float, lat: float = 1.0, lon: float = 2.0, age: float = 0.0) -> Fix:
    """A fix taken *age* seconds before NOW."""
    return Fix(
        latitude=lat,
        longitude=lon,
        horizontal_accuracy=accuracy,
        timestamp=NOW - timedelta(seconds=age),
    )


class FakeLocationProvider:
    def __init__(self, authorization=AuthorizationStatus.GRANTED, enabled=True):
        self.authorization = authorization
        self.enabled = enabled
        self.sink = None
        self.starts = []
        self.stops = 0
        self.authorization_requests = 0

    def attach(self, sink):
        self.sink = sink

    def authorization_status(self):
        return self.authorization

    def request_authorization(self):
        self.authorization_requests += 1

    def services_enabled(self):
        return self.enabled

    def start(self, desired_accuracy):
        self.starts.append(desired_accuracy)

    def stop(self):
        self.stops += 1


class FakeGeocoder:
    """Each request blocks until the test releases it."""

    def __init__(self):
        self.requests = []  # (latitude, longitude, future)
        self.in_flight = 0
        self.max_in_flight = 0

    async def reverse_geocode(self, latitude, longitude):
        future = asyncio.get_running_loop().create_future()
        self.requests.append((latitude, longitude, future))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            return await future
        finally:
            self.in_flight -= 1

    @property
    def pending(self):
        return [r for r in self.requests if not r[2].done()]

    async def release(self, controller, addresses=None, error=None, index=-1):
        """Complete request *index* and let the controller apply the result."""
        future = self.requests[index][2]
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(list(addresses or []))
        for _ in range(3):
            await asyncio.sleep(0)
        await controller.drain()


class RecordingPresenter:
    def __init__(self):
        self.renders = []
        self.notices = []

    def render(self, state):
        self.renders.append(state)

    def show_notice(self, notice):
        self.notices.append(notice)


@pytest.fixture()
def provider() -> FakeLocationProvider:
    return FakeLocationProvider()


@pytest.fixture()
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture()
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture()
def make_controller(provider, geocoder, presenter):
    """Build a controller wired to the fakes; call it inside a running loop."""
    from current_location.services.controller import LocationAcquisitionController

    def factory(**kwargs):
        kwargs.setdefault("desired_accuracy", 10.0)
        kwargs.setdefault("max_fix_age", 5.0)
        kwargs.setdefault("clock", lambda: NOW)
        return LocationAcquisitionController(provider, geocoder, presenter, **kwargs)

    return factory


@pytest.fixture()
def running():
    """Async context manager running a controller's event loop."""

    @asynccontextmanager
    async def _running(controller):
        task = asyncio.create_task(controller.run())
        try:
            yield controller
        finally:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    return _running


@pytest.fixture()
def paris_candidates():
    return [
        Address(locality="Paris", postal_code="75001"),
        Address(admin_area="Île-de-France"),
    ]
