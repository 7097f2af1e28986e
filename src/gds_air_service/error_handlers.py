"""
Error handling for the GDS air service HTTP surface
"""

import traceback
from typing import Any, Dict, Optional
from datetime import datetime
from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
import structlog

from .errors import (
    DuplicateTicketFound, GDSAPIError, GDSServiceError,
    MissingPaxListAndBooking, NoReservationToImport, NoValidFare, PNRHasOpenTickets,
    RequestInconsistency, SegmentBookingFailed, TerminalRuntimeError, TicketingFailed,
    TicketingFoidRequired, UnableToCancelTicketStatusNotOpen
)

logger = structlog.get_logger()


class ErrorCode:
    """Error codes for failures that have no GDS error kind"""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorSeverity:
    """Error severity levels"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# First match wins, subclasses before their bases
STATUS_BY_ERROR_KIND = [
    (NoReservationToImport, 404),
    (MissingPaxListAndBooking, 404),
    (PNRHasOpenTickets, 409),
    (UnableToCancelTicketStatusNotOpen, 409),
    (RequestInconsistency, 409),
    (DuplicateTicketFound, 409),
    (NoValidFare, 422),
    (SegmentBookingFailed, 422),
    (TicketingFailed, 422),
    (TicketingFoidRequired, 422),
    (TerminalRuntimeError, 502),
]


class ErrorHandler:
    """Centralized error response formatting"""

    @staticmethod
    def create_error_response(
        message: str,
        error_code: str,
        details: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create standardized error response"""

        error_response = {
            "status": "error",
            "message": message,
            "error_code": error_code,
            "timestamp": datetime.now().isoformat()
        }

        if details:
            error_response["details"] = details

        if request_id:
            error_response["request_id"] = request_id

        return error_response

    @staticmethod
    def determine_error_severity(status_code: int) -> str:
        """Determine error severity for logging"""
        if status_code >= 500 and status_code != 502:
            return ErrorSeverity.CRITICAL
        if status_code == 502:
            return ErrorSeverity.HIGH
        if status_code in (409, 422):
            return ErrorSeverity.MEDIUM
        return ErrorSeverity.LOW


class ExceptionMapper:
    """Map exceptions to appropriate HTTP responses"""

    @staticmethod
    def root_cause(exception: BaseException) -> BaseException:
        """Follow caused_by links down to the original failure"""
        seen = set()
        current = exception
        while isinstance(current, GDSServiceError) and current.caused_by is not None and id(current) not in seen:
            seen.add(id(current))
            current = current.caused_by
        return current

    @staticmethod
    def status_code_for(exception: BaseException) -> int:
        """HTTP status for an error, looking through wrapping errors to their cause"""
        for candidate in (ExceptionMapper.root_cause(exception), exception):
            if isinstance(candidate, GDSAPIError):
                return candidate.status_code if candidate.status_code in (503, 504) else 502
            for error_class, status_code in STATUS_BY_ERROR_KIND:
                if isinstance(candidate, error_class):
                    return status_code

        if isinstance(exception, GDSServiceError):
            return 502
        return 500

    @staticmethod
    def map_exception(exception: Exception, request_id: str = None) -> HTTPException:
        """Map various exceptions to appropriate HTTP exceptions"""

        if isinstance(exception, HTTPException):
            return exception

        status_code = ExceptionMapper.status_code_for(exception)

        if isinstance(exception, GDSServiceError):
            details = None
            cause = ExceptionMapper.root_cause(exception)
            if cause is not exception:
                details = {
                    "cause": getattr(cause, "error_code", type(cause).__name__),
                    "cause_message": str(cause)
                }
            return HTTPException(
                status_code=status_code,
                detail=ErrorHandler.create_error_response(
                    message=exception.message,
                    error_code=exception.error_code,
                    details=details,
                    request_id=request_id
                )
            )

        # Generic internal server error
        return HTTPException(
            status_code=500,
            detail=ErrorHandler.create_error_response(
                message="We're experiencing technical difficulties. Please try again later.",
                error_code=ErrorCode.INTERNAL_ERROR,
                details={"exception_type": type(exception).__name__},
                request_id=request_id
            )
        )


class ErrorLogger:
    """Error logging with context"""

    @staticmethod
    def log_error(
        exception: Exception,
        status_code: int,
        request_id: str = None,
        context: Dict[str, Any] = None,
        include_traceback: bool = True
    ):
        """Log error with full context"""

        severity = ErrorHandler.determine_error_severity(status_code)

        log_data = {
            "error_code": getattr(exception, "error_code", ErrorCode.INTERNAL_ERROR),
            "error_type": type(exception).__name__,
            "error_message": str(exception),
            "status_code": status_code,
            "severity": severity,
            "request_id": request_id
        }

        if context:
            log_data["context"] = context

        if include_traceback:
            log_data["traceback"] = "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))

        if severity == ErrorSeverity.CRITICAL:
            logger.critical("Critical error occurred", **log_data)
        elif severity == ErrorSeverity.HIGH:
            logger.error("High severity error occurred", **log_data)
        elif severity == ErrorSeverity.MEDIUM:
            logger.warning("Medium severity error occurred", **log_data)
        else:
            logger.info("Low severity error occurred", **log_data)


async def gds_exception_handler(request: Request, exc: GDSServiceError) -> JSONResponse:
    """Handler for GDS error kinds raised by the workflows"""

    request_id = getattr(request.state, 'request_id', None)
    http_exception = ExceptionMapper.map_exception(exc, request_id)

    ErrorLogger.log_error(
        exception=exc,
        status_code=http_exception.status_code,
        request_id=request_id,
        context={"url": str(request.url), "method": request.method},
        include_traceback=http_exception.status_code >= 500
    )

    return JSONResponse(
        status_code=http_exception.status_code,
        content=http_exception.detail
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled exceptions"""

    request_id = getattr(request.state, 'request_id', None)

    ErrorLogger.log_error(
        exception=exc,
        status_code=500,
        request_id=request_id,
        context={"url": str(request.url), "method": request.method}
    )

    http_exception = ExceptionMapper.map_exception(exc, request_id)

    return JSONResponse(
        status_code=http_exception.status_code,
        content=http_exception.detail
    )


async def validation_exception_handler(request: Request, exc) -> JSONResponse:
    """Handler for request validation exceptions"""

    request_id = getattr(request.state, 'request_id', None)

    logger.warning(
        "Request validation failed",
        error=str(exc),
        url=str(request.url),
        request_id=request_id
    )

    return JSONResponse(
        status_code=422,
        content=ErrorHandler.create_error_response(
            message="Request validation failed. Please check your input and try again.",
            error_code=ErrorCode.VALIDATION_ERROR,
            details={"errors": jsonable_encoder(exc.errors())} if hasattr(exc, 'errors') else {"error": str(exc)},
            request_id=request_id
        )
    )
