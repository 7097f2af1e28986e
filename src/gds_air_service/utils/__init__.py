"""
Utility modules for the GDS air service
"""

from .logger import get_logger, setup_logging, log_remote_call
from .formatters import MONTH_CODES, format_gds_date
from .validators import validate_pnr, validate_ticket_number, validate_airport_code, validate_airline_code

__all__ = [
    "MONTH_CODES",
    "format_gds_date",
    "get_logger",
    "setup_logging",
    "log_remote_call",
    "validate_pnr",
    "validate_ticket_number",
    "validate_airport_code",
    "validate_airline_code",
]
