"""
Formatting helpers for GDS terminal and SSR text
"""

from datetime import date

# GDS formats always use English month codes, whatever the process locale
MONTH_CODES = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)


def format_gds_date(value: date, include_year: bool = False) -> str:
    """
    Format a date as DDMMM (21JUN), or DDMMMYY (21JUN24) with include_year
    """
    code = f"{value.day:02d}{MONTH_CODES[value.month - 1]}"
    if include_year:
        code += f"{value.year % 100:02d}"
    return code
