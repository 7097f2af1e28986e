"""
Passenger enrichment applied before a reservation is created
"""

import calendar
from datetime import date
from typing import Any, Dict, Optional

from ..config import config
from ..utils.formatters import format_gds_date


def add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the month"""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def child_age_category(age: int) -> str:
    """GDS passenger type code for a child of the given age"""
    return f"C0{age}" if age < 10 else f"C{age}"


def add_passenger_meta(params: Dict[str, Any], today: Optional[date] = None) -> Dict[str, Any]:
    """
    Return booking params with passengers prepared for the GDS:

    - ``dob`` normalised to YYYY-MM-DD
    - a DOCS SSR built from passport data, valid for the configured months
    - children (CNN) flagged with ``is_child`` and an age-coded category
    """
    today = today or date.today()
    expiry = add_months(today, config.workflow.docs_expiry_months_ahead)

    passengers = []
    for passenger in params.get("passengers") or []:
        passenger = dict(passenger)

        birth_date = None
        if passenger.get("birth_date"):
            # only the leading YYYY-MM-DD counts, a time or offset suffix is ignored
            birth_date = date.fromisoformat(str(passenger["birth_date"]).strip()[:10])
            passenger["dob"] = birth_date.strftime("%Y-%m-%d")

        if passenger.get("age_category") == "CNN" and passenger.get("age") is not None:
            passenger["is_child"] = True
            passenger["age_category"] = child_age_category(int(passenger["age"]))

        if birth_date and passenger.get("pass_number"):
            country = passenger.get("pass_country", "")
            passenger["ssr"] = {
                "type": "DOCS",
                "text": "/".join([
                    "P",
                    country,
                    passenger["pass_number"],
                    country,
                    format_gds_date(birth_date, include_year=True),
                    passenger.get("gender", ""),
                    format_gds_date(expiry, include_year=True),
                    passenger.get("last_name", ""),
                    passenger.get("first_name", ""),
                ])
            }

        passengers.append(passenger)

    if "passengers" in params:
        return {**params, "passengers": passengers}
    return dict(params)
