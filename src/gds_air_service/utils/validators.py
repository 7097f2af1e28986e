"""
Validation utilities
"""

import re


def validate_pnr(pnr: str) -> bool:
    """
    Validate PNR format
    PNR should be 6 alphanumeric characters
    """
    if not pnr:
        return False

    # Remove whitespace and convert to uppercase
    pnr = pnr.strip().upper()

    pattern = r'^[A-Z0-9]{6}$'
    return bool(re.match(pattern, pnr))


def validate_ticket_number(ticket_number: str) -> bool:
    """
    Validate ticket number format
    Ticket number is a 3 digit airline prefix followed by a 10 digit serial
    """
    if not ticket_number:
        return False

    pattern = r'^[0-9]{13}$'
    return bool(re.match(pattern, ticket_number.strip()))


def validate_airport_code(code: str) -> bool:
    """
    Validate airport code format (IATA 3-letter codes)
    """
    if not code:
        return False

    code = code.strip().upper()

    pattern = r'^[A-Z]{3}$'
    return bool(re.match(pattern, code))


def validate_airline_code(code: str) -> bool:
    """
    Validate airline designator (IATA 2-character code)
    """
    if not code:
        return False

    code = code.strip().upper()

    pattern = r'^[A-Z0-9]{2}$'
    return bool(re.match(pattern, code))
