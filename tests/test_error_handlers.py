"""
Tests for mapping errors to HTTP responses
"""

import pytest

from gds_air_service.error_handlers import ErrorHandler, ErrorSeverity, ExceptionMapper
from gds_air_service.errors import (
    AirRuntimeError, FailedToCancelPnr, FailedToCancelTicket, GDSAPIError, GetPnrError,
    MissingPaxListAndBooking, NoValidFare, PnrParseError, RequestInconsistency,
    TerminalRuntimeError, UnableToImportPnr, UnableToOpenPNRInTerminal
)


class TestStatusCodes:

    @pytest.mark.parametrize("error,status_code", [
        (NoValidFare(), 422),
        (MissingPaxListAndBooking(), 404),
        (RequestInconsistency(), 409),
        (TerminalRuntimeError(), 502),
        (AirRuntimeError(), 502),
        (GDSAPIError("timeout", 504, "TIMEOUT_ERROR"), 504),
        (GDSAPIError("bad gateway", 500, "HTTP_ERROR"), 502),
        (ValueError("boom"), 500),
    ])
    def test_status_code(self, error, status_code):
        """Test HTTP status per error kind"""
        assert ExceptionMapper.status_code_for(error) == status_code

    def test_wrapped_error_uses_root_cause(self):
        """Test wrapped error uses root cause"""
        error = FailedToCancelTicket(caused_by=GDSAPIError("timeout", 504, "TIMEOUT_ERROR"))

        assert ExceptionMapper.status_code_for(error) == 504

    def test_root_cause_follows_chain(self):
        """Test root cause follows chain"""
        cause = TerminalRuntimeError()
        error = UnableToImportPnr(caused_by=UnableToOpenPNRInTerminal(caused_by=cause))

        assert ExceptionMapper.root_cause(error) is cause

    def test_wrapper_status_when_cause_unmapped(self):
        """Test wrapper status when cause unmapped"""
        error = GetPnrError(caused_by=PnrParseError(data="SCREEN"))

        assert ExceptionMapper.status_code_for(error) == 502


class TestMapException:

    def test_details_name_cause(self):
        """Test details name cause"""
        error = FailedToCancelPnr(caused_by=NoValidFare())

        http_exception = ExceptionMapper.map_exception(error, request_id="req_1")

        assert http_exception.status_code == 422
        assert http_exception.detail["error_code"] == "FAILED_TO_CANCEL_PNR"
        assert http_exception.detail["details"]["cause"] == "NO_VALID_FARE"
        assert http_exception.detail["request_id"] == "req_1"

    def test_generic_exception(self):
        """Test generic exception"""
        http_exception = ExceptionMapper.map_exception(RuntimeError("boom"))

        assert http_exception.status_code == 500
        assert http_exception.detail["error_code"] == "INTERNAL_ERROR"


class TestSeverity:

    @pytest.mark.parametrize("status_code,severity", [
        (500, ErrorSeverity.CRITICAL),
        (502, ErrorSeverity.HIGH),
        (409, ErrorSeverity.MEDIUM),
        (404, ErrorSeverity.LOW),
    ])
    def test_severity(self, status_code, severity):
        """Test log severity per status code"""
        assert ErrorHandler.determine_error_severity(status_code) == severity
