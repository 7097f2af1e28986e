"""
Tests for the error taxonomy
"""

import pytest

from gds_air_service.errors import (
    AIR_ERROR_KINDS, AirRuntimeError, FailedToCancelPnr, GDSAPIError, GDSServiceError,
    NoReservationToImport, NoValidFare, PNRHasOpenTickets, TicketingFoidRequired, error_from_code
)


class TestErrorFromCode:

    @pytest.mark.parametrize("code,error_class", [
        ("NO_RESERVATION_TO_IMPORT", NoReservationToImport),
        ("no_valid_fare", NoValidFare),
        ("TICKETING_FOID_REQUIRED", TicketingFoidRequired),
    ])
    def test_known_codes(self, code, error_class):
        """Test known codes"""
        error = error_from_code(code, data={"pnr": "PNR001"})

        assert type(error) is error_class
        assert error.data == {"pnr": "PNR001"}

    def test_unknown_code(self):
        """Test unknown code"""
        error = error_from_code("SOMETHING_NEW", message="Gateway says no")

        assert type(error) is AirRuntimeError
        assert error.message == "Gateway says no"

    def test_every_kind_registered(self):
        """Test every kind registered"""
        assert AIR_ERROR_KINDS["PNR_HAS_OPEN_TICKETS"] is PNRHasOpenTickets
        assert all(issubclass(kind, AirRuntimeError) for kind in AIR_ERROR_KINDS.values())


class TestCausedBy:

    def test_cause_is_chained(self):
        """Test cause is chained"""
        cause = PNRHasOpenTickets(data={"pnr": "PNR001"})
        error = FailedToCancelPnr(data={"pnr": "PNR001"}, caused_by=cause)

        assert error.caused_by is cause
        assert error.__cause__ is cause
        assert "PNRHasOpenTickets" in str(error)

    def test_default_message(self):
        """Test default message"""
        error = NoValidFare()

        assert error.message == NoValidFare.default_message
        assert str(error) == NoValidFare.default_message
        assert isinstance(error, GDSServiceError)


class TestGDSAPIError:

    def test_status_and_code(self):
        """Test status and code"""
        error = GDSAPIError("Request timed out", status_code=504, error_code="TIMEOUT_ERROR")

        assert error.status_code == 504
        assert error.error_code == "TIMEOUT_ERROR"
        assert error.message == "Request timed out"
