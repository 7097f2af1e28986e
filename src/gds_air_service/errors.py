"""
Error taxonomy for GDS air workflows

Workflows recognise failures by class, never by message text. Every kind
carries a stable ``error_code`` which is also the code the GDS gateway
reports in its error payloads.
"""

from typing import Any, Dict, Optional, Type


class GDSServiceError(Exception):
    """Base exception for the GDS air service"""

    error_code = "GDS_SERVICE_ERROR"
    default_message = "GDS service error"

    def __init__(
        self,
        data: Any = None,
        caused_by: Optional[BaseException] = None,
        message: Optional[str] = None,
    ):
        self.data = data
        self.caused_by = caused_by
        self.message = message or self.default_message
        super().__init__(self.message)
        if caused_by is not None:
            self.__cause__ = caused_by

    def __str__(self) -> str:
        if self.caused_by is not None:
            return f"{self.message} (caused by {type(self.caused_by).__name__}: {self.caused_by})"
        return self.message


class GDSAPIError(GDSServiceError):
    """Transport-level failure talking to the GDS API"""

    error_code = "GDS_API_ERROR"
    default_message = "GDS API request failed"

    def __init__(self, message: str, status_code: int = 502, error_code: str = "GDS_API_ERROR", data: Any = None):
        super().__init__(data=data, message=message)
        self.status_code = status_code
        self.error_code = error_code


class TerminalRuntimeError(GDSServiceError):
    """Failure of the terminal emulation channel"""

    error_code = "TERMINAL_ERROR"
    default_message = "Terminal request failed"


class AirRuntimeError(GDSServiceError):
    """Runtime error raised by an air workflow or reported by the GDS"""

    error_code = "AIR_RUNTIME_ERROR"
    default_message = "Air service runtime error"


# Reported by the GDS API

class SegmentBookingFailed(AirRuntimeError):
    error_code = "SEGMENT_BOOKING_FAILED"
    default_message = "Failed to book one or more segments"


class NoValidFare(AirRuntimeError):
    error_code = "NO_VALID_FARE"
    default_message = "No valid fare for the requested itinerary"


class TicketingFailed(AirRuntimeError):
    error_code = "TICKETING_FAILED"
    default_message = "Ticketing failed"


class TicketingFoidRequired(AirRuntimeError):
    error_code = "TICKETING_FOID_REQUIRED"
    default_message = "Form of identification is required for ticketing"


class NoReservationToImport(AirRuntimeError):
    error_code = "NO_RESERVATION_TO_IMPORT"
    default_message = "No air reservation found to import"


class TicketInfoIncomplete(AirRuntimeError):
    error_code = "TICKET_INFO_INCOMPLETE"
    default_message = "Ticket information is incomplete"


class DuplicateTicketFound(AirRuntimeError):
    error_code = "DUPLICATE_TICKET_FOUND"
    default_message = "More than one ticket found for the ticket number"


# Raised by the import fallback

class UnableToOpenPNRInTerminal(AirRuntimeError):
    error_code = "UNABLE_TO_OPEN_PNR_IN_TERMINAL"
    default_message = "Unable to open PNR in terminal"


class UnableToAddExtraSegment(AirRuntimeError):
    error_code = "UNABLE_TO_ADD_EXTRA_SEGMENT"
    default_message = "Unable to add placeholder segment to PNR"


class UnableToSaveBookingWithExtraSegment(AirRuntimeError):
    error_code = "UNABLE_TO_SAVE_BOOKING_WITH_EXTRA_SEGMENT"
    default_message = "Unable to save PNR with placeholder segment"


class UnableToImportPnr(AirRuntimeError):
    error_code = "UNABLE_TO_IMPORT_PNR"
    default_message = "Unable to import PNR"


# Raised by ticket and booking lookups

class PnrParseError(AirRuntimeError):
    error_code = "PNR_PARSE_ERROR"
    default_message = "Unable to parse PNR from terminal screen"


class GetPnrError(AirRuntimeError):
    error_code = "GET_PNR_ERROR"
    default_message = "Unable to get PNR by ticket number"


class UnableToRetrieveTickets(AirRuntimeError):
    error_code = "UNABLE_TO_RETRIEVE_TICKETS"
    default_message = "Unable to retrieve tickets for PNR"


class RequestInconsistency(AirRuntimeError):
    error_code = "REQUEST_INCONSISTENCY"
    default_message = "Terminal returned different screens for the same request"


class MissingPaxListAndBooking(AirRuntimeError):
    error_code = "MISSING_PAX_LIST_AND_BOOKING"
    default_message = "Screen contains neither a passenger list nor a booking"


# Raised by cancellation workflows

class FailedToCancelTicket(AirRuntimeError):
    error_code = "FAILED_TO_CANCEL_TICKET"
    default_message = "Failed to cancel ticket"


class FailedToCancelPnr(AirRuntimeError):
    error_code = "FAILED_TO_CANCEL_PNR"
    default_message = "Failed to cancel PNR"


class PNRHasOpenTickets(AirRuntimeError):
    error_code = "PNR_HAS_OPEN_TICKETS"
    default_message = "PNR has open tickets, pass cancel_tickets to void them"


class UnableToCancelTicketStatusNotOpen(AirRuntimeError):
    error_code = "UNABLE_TO_CANCEL_TICKET_STATUS_NOT_OPEN"
    default_message = "Unable to cancel ticket with coupons that are not OPEN"


def _collect_error_kinds(base: Type[GDSServiceError]) -> Dict[str, Type[GDSServiceError]]:
    kinds = {}
    for subclass in base.__subclasses__():
        kinds[subclass.error_code] = subclass
        kinds.update(_collect_error_kinds(subclass))
    return kinds


AIR_ERROR_KINDS: Dict[str, Type[AirRuntimeError]] = _collect_error_kinds(AirRuntimeError)


def error_from_code(code: Optional[str], data: Any = None, message: Optional[str] = None) -> AirRuntimeError:
    """Build the error kind matching a GDS error code"""
    error_class = AIR_ERROR_KINDS.get((code or "").upper(), AirRuntimeError)
    return error_class(data=data, message=message)
