from contextlib import asynccontextmanager
import logging
import asyncio

from current_location.core.config import settings
from current_location.models.session import ControllerState
from current_location.services.controller import LocationAcquisitionController
from current_location.services.geocoding_service import geocoding_service
from current_location.services.location_provider import SimulatedLocationProvider
from current_location.services.presenter import LoggingPresenter

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(controller: LocationAcquisitionController):
    """Run the controller for the duration of the block"""
    # Startup
    logger.info(f"Starting {settings.PROJECT_NAME} {settings.VERSION}...")
    controller_task = asyncio.create_task(controller.run())

    try:
        yield controller
    finally:
        # Shutdown
        logger.info(f"Shutting down {settings.PROJECT_NAME}...")
        await controller.close()
        controller_task.cancel()
        await asyncio.gather(controller_task, return_exceptions=True)


def build_controller() -> LocationAcquisitionController:
    """Wire the controller to the simulated source and Nominatim"""
    return LocationAcquisitionController(
        location_provider=SimulatedLocationProvider(),
        geocoder=geocoding_service,
        presenter=LoggingPresenter(),
    )


async def _until_stopped(controller: LocationAcquisitionController, poll_interval: float):
    await controller.drain()
    while controller.state != ControllerState.IDLE:
        await asyncio.sleep(poll_interval)


async def acquire_once(
    controller: LocationAcquisitionController,
    timeout: float = 60.0,
    poll_interval: float = 0.1,
):
    """Tap start once and wait until acquisition has stopped"""
    async with lifespan(controller):
        controller.start_stop_tapped()
        try:
            await asyncio.wait_for(_until_stopped(controller, poll_interval), timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Desired accuracy not reached within {timeout}s")
            if controller.state == ControllerState.STREAMING:
                controller.start_stop_tapped()
        await controller.wait_idle()
        return controller.display_state


if __name__ == "__main__":
    final_state = asyncio.run(acquire_once(build_controller()))
    logger.info(f"Final state: {final_state.mode.value}")
