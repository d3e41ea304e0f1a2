"""Tests for current_location.services.display_service."""

from conftest import make_fix

from current_location.core.exceptions import GeocodeFailure, LocationDenied, LocationFailure
from current_location.models.display import DisplayMode
from current_location.models.location import Address
from current_location.models.session import AcquisitionSession
from current_location.services.display_service import derive_display_state


class TestWithFix:
    def test_coordinates_have_eight_decimals(self):
        session = AcquisitionSession(best_fix=make_fix(20, lat=48.8584, lon=2.2945))
        state = derive_display_state(session)
        assert state.mode == DisplayMode.HAS_FIX
        assert state.latitude_text == "48.85840000"
        assert state.longitude_text == "2.29450000"
        assert state.coordinates_text == "48.85840000, 2.29450000"
        assert state.status_text == ""
        assert state.can_tag is True

    def test_custom_precision(self):
        session = AcquisitionSession(best_fix=make_fix(20, lat=1.23456, lon=-2.5))
        state = derive_display_state(session, decimals=2)
        assert state.coordinates_text == "1.23, -2.50"

    def test_formatted_address(self):
        session = AcquisitionSession(
            best_fix=make_fix(20),
            best_address=Address(street="Main St", locality="Springfield"),
        )
        assert derive_display_state(session).address_text == "Main St\nSpringfield "

    def test_address_wins_over_in_flight(self):
        session = AcquisitionSession(
            best_fix=make_fix(20),
            best_address=Address(postal_code="75001"),
            geocode_in_flight=True,
        )
        assert derive_display_state(session).address_text == "\n75001"

    def test_searching_for_address(self):
        session = AcquisitionSession(best_fix=make_fix(20), geocode_in_flight=True)
        assert derive_display_state(session).address_text == "Searching for Address..."

    def test_error_finding_address(self):
        session = AcquisitionSession(
            best_fix=make_fix(20),
            last_geocode_error=GeocodeFailure(1.0, 2.0, "timeout"),
        )
        assert derive_display_state(session).address_text == "Error Finding Address"

    def test_no_address_found(self):
        session = AcquisitionSession(best_fix=make_fix(20))
        assert derive_display_state(session).address_text == "No Address Found"

    def test_fix_hides_location_error(self):
        session = AcquisitionSession(
            best_fix=make_fix(20), last_location_error=LocationFailure("boom")
        )
        state = derive_display_state(session, services_enabled=False)
        assert state.mode == DisplayMode.HAS_FIX
        assert state.status_text == ""


class TestWithoutFix:
    def test_idle(self):
        state = derive_display_state(AcquisitionSession())
        assert state.mode == DisplayMode.NO_FIX
        assert state.status_text == "Tap 'Get My Location' to Start"
        assert state.coordinates_text == ""
        assert state.address_text == ""
        assert state.can_tag is False

    def test_searching(self):
        state = derive_display_state(AcquisitionSession(is_active=True))
        assert state.mode == DisplayMode.SEARCHING
        assert state.status_text == "Searching..."

    def test_permission_denied(self):
        session = AcquisitionSession(last_location_error=LocationDenied())
        state = derive_display_state(session)
        assert state.mode == DisplayMode.ERROR
        assert state.status_text == "Location Services Disabled"

    def test_services_disabled_globally(self):
        state = derive_display_state(AcquisitionSession(is_active=True), services_enabled=False)
        assert state.mode == DisplayMode.ERROR
        assert state.status_text == "Location Services Disabled"

    def test_other_location_error(self):
        session = AcquisitionSession(last_location_error=LocationFailure("network"))
        state = derive_display_state(session)
        assert state.mode == DisplayMode.ERROR
        assert state.status_text == "Error Getting Location"

    def test_foreign_error_counts_as_location_error(self):
        session = AcquisitionSession(last_location_error=RuntimeError("driver crashed"))
        assert derive_display_state(session).status_text == "Error Getting Location"


class TestControlLabel:
    def test_stop_while_streaming(self):
        assert derive_display_state(AcquisitionSession(is_active=True)).control_label == "Stop"

    def test_start_while_idle(self):
        session = AcquisitionSession(best_fix=make_fix(5))
        assert derive_display_state(session).control_label == "Get My Location"
