"""
Parsers for free-text terminal screens

Terminal replies are matched against fixed-format lines. A parser returns
None when the screen does not have the expected shape; callers decide which
error that amounts to.
"""

import re
from typing import List, Optional

from ..types import PassengerListEntry

BF_IN_USE_PREFIX = r'(?:\*\* THIS BF IS CURRENTLY IN USE \*\*\s*)?'

# 001   SMITH/JOHN MR          15AUG
PASSENGER_LINE_PATTERN = re.compile(
    r"^\s*(\d{1,3})\s+(?:\d{2}\s+)?([A-Z'\- ]+/[A-Z'\- ]+?)\s*(\d{2}[A-Z]{3})?\s*$"
)
BOOKING_PNR_PATTERN = re.compile(r'^' + BF_IN_USE_PREFIX + r'([A-Z0-9]{6})/')
TICKET_RLOC_PATTERN = re.compile(r'RLOC [^\s]{2} ([^\s]{6})')


def pnr_screen_pattern(pnr: str) -> re.Pattern:
    """Pattern of a screen showing the given PNR"""
    return re.compile(r'^' + BF_IN_USE_PREFIX + re.escape(pnr.upper()))


def search_passengers_list(screen: str) -> Optional[List[PassengerListEntry]]:
    """Parse a passenger name search list, None if the screen is not a list"""
    if not isinstance(screen, str):
        return None

    entries = []
    for line in screen.upper().splitlines():
        match = PASSENGER_LINE_PATTERN.match(line)
        if not match:
            continue
        entries.append(PassengerListEntry(
            id=int(match.group(1)),
            name=match.group(2).strip(),
            travel_date=match.group(3)
        ))

    return entries or None


def booking_pnr(screen: str) -> Optional[str]:
    """Extract the record locator from a booking screen"""
    if not isinstance(screen, str):
        return None

    match = BOOKING_PNR_PATTERN.match(screen.strip().upper())
    return match.group(1) if match else None


def pnr_from_ticket_screen(screen: str) -> Optional[str]:
    """Extract the record locator from a *TE ticket display"""
    if not isinstance(screen, str):
        return None

    match = TICKET_RLOC_PATTERN.search(screen)
    return match.group(1) if match else None
