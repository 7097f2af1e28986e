"""
GDS API interface definitions
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from ..types import Booking, TicketData


class GDSAPIInterface(ABC):
    """Interface for GDS air operations"""

    @abstractmethod
    async def search_low_fares(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Search low fare itineraries"""
        pass

    @abstractmethod
    async def air_price(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Price an itinerary"""
        pass

    @abstractmethod
    async def air_price_pricing_solution(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Price an itinerary and return the pricing solution used for booking"""
        pass

    @abstractmethod
    async def gds_queue(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Place a PNR on a GDS queue"""
        pass

    @abstractmethod
    async def create_reservation(self, params: Dict[str, Any]) -> Any:
        """Create a reservation from a pricing solution"""
        pass

    @abstractmethod
    async def cancel_ur(self, locator_code: str) -> Dict[str, Any]:
        """Cancel a universal record"""
        pass

    @abstractmethod
    async def import_pnr(self, pnr: str, **options) -> List[Booking]:
        """Import a PNR into a universal record"""
        pass

    @abstractmethod
    async def cancel_pnr(self, booking: Booking) -> Any:
        """Cancel the air reservation of a booking"""
        pass

    @abstractmethod
    async def ticket(self, params: Dict[str, Any]) -> Any:
        """Issue tickets for a reservation"""
        pass

    @abstractmethod
    async def foid(self, booking: Booking) -> Any:
        """Add form of identification to a booking"""
        pass

    @abstractmethod
    async def flight_info(self, flight_info_criteria: List[Dict[str, Any]]) -> Any:
        """Get flight information"""
        pass

    @abstractmethod
    async def get_ticket(
        self,
        ticket_number: str,
        pnr: Optional[str] = None,
        uapi_ur_locator: Optional[str] = None,
    ) -> TicketData:
        """Get ticket data by ticket number"""
        pass

    @abstractmethod
    async def cancel_ticket(self, pnr: str, ticket_number: str) -> Any:
        """Void a ticket"""
        pass

    @abstractmethod
    async def exchange_quote(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Quote an exchange for a booking"""
        pass

    @abstractmethod
    async def exchange_booking(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Confirm an exchange for a booking"""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release client resources"""
        pass
