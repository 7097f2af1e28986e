"""
Core data types for the GDS air service
"""

from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils.formatters import format_gds_date
from .utils.validators import (
    validate_pnr, validate_ticket_number, validate_airport_code, validate_airline_code
)


# GDS payloads inspected by the workflows
class BookingTicketRef(BaseModel):
    """Ticket reference listed on an imported booking"""
    model_config = ConfigDict(extra="allow")

    number: str


class Booking(BaseModel):
    """One reservation of an imported PNR"""
    model_config = ConfigDict(extra="allow")

    pnr: str
    uapi_ur_locator: Optional[str] = None
    uapi_reservation_locator: Optional[str] = None
    created_at: Optional[datetime] = None
    tickets: List[BookingTicketRef] = Field(default_factory=list)


class Coupon(BaseModel):
    """Flight coupon of a ticket"""
    model_config = ConfigDict(extra="allow")

    number: Optional[int] = None
    status: str = Field(..., description="O (open), V (void) or another GDS coupon status")

    @property
    def is_void(self) -> bool:
        return self.status == "V"

    @property
    def is_open_or_void(self) -> bool:
        return self.status in ("O", "V")


class TicketDocument(BaseModel):
    """Single ticket document with its coupons"""
    model_config = ConfigDict(extra="allow")

    ticket_number: Optional[str] = None
    coupons: List[Coupon] = Field(default_factory=list)


class TicketData(BaseModel):
    """Ticket lookup result"""
    model_config = ConfigDict(extra="allow")

    pnr: Optional[str] = None
    uapi_ur_locator: Optional[str] = None
    ticket_number: Optional[str] = None
    tickets: List[TicketDocument] = Field(default_factory=list)

    @property
    def all_coupons_void(self) -> bool:
        return all(coupon.is_void for ticket in self.tickets for coupon in ticket.coupons)

    @property
    def all_coupons_open_or_void(self) -> bool:
        return all(coupon.is_open_or_void for ticket in self.tickets for coupon in ticket.coupons)


# Terminal search results
class PassengerListEntry(BaseModel):
    """Line of a terminal passenger name search list"""
    id: int
    name: str
    travel_date: Optional[str] = None
    pnr: Optional[str] = None


class BookingSearchResult(BaseModel):
    """Result of a passenger name search"""
    type: Literal["list", "pnr"]
    data: Union[List[PassengerListEntry], str]


class DummySegment(BaseModel):
    """Placeholder passive segment added through the terminal"""
    airline: str
    segment_class: str
    origin: str
    destination: str
    comment: str
    segment_date: date

    @field_validator("airline")
    @classmethod
    def check_airline(cls, value: str) -> str:
        if not validate_airline_code(value):
            raise ValueError(f"Invalid airline code: {value}")
        return value.upper()

    @field_validator("origin", "destination")
    @classmethod
    def check_airport(cls, value: str) -> str:
        if not validate_airport_code(value):
            raise ValueError(f"Invalid airport code: {value}")
        return value.upper()

    @property
    def date_code(self) -> str:
        return format_gds_date(self.segment_date)

    def command(self) -> str:
        return (
            f"0{self.airline}OPEN{self.segment_class}{self.date_code}"
            f"{self.origin}{self.destination}{self.comment}"
        ).upper()

    def result_line(self) -> str:
        return (
            f"1. {self.airline} OPEN {self.segment_class}  {self.date_code} "
            f"{self.origin}{self.destination} {self.comment}"
        ).upper()


# HTTP request models
class PNRRequest(BaseModel):
    """Request carrying a PNR locator"""
    pnr: str = Field(..., description="Passenger Name Record locator")
    options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("pnr")
    @classmethod
    def check_pnr(cls, value: str) -> str:
        if not validate_pnr(value):
            raise ValueError("PNR must be 6 alphanumeric characters")
        return value.strip().upper()


class CancelPNRRequest(PNRRequest):
    """Request to cancel a PNR"""
    cancel_tickets: bool = False


class ExchangeBookingRequest(PNRRequest):
    """Request to confirm an exchange"""
    exchange_token: str


class TicketNumberRequest(BaseModel):
    """Request carrying a ticket number"""
    ticket_number: str

    @field_validator("ticket_number")
    @classmethod
    def check_ticket_number(cls, value: str) -> str:
        if not validate_ticket_number(value):
            raise ValueError("Ticket number must be 13 digits")
        return value.strip()


class PassengerSearchRequest(BaseModel):
    """Request to search bookings by passenger name"""
    search_phrase: str = Field(..., min_length=1)


class APIResponse(BaseModel):
    """Standard API response model"""
    status: str = Field(..., description="Response status: completed or error")
    data: Optional[Any] = Field(None, description="Response data")
    timestamp: datetime = Field(default_factory=datetime.now)
