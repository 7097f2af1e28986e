"""
Air booking workflows over the GDS API with terminal fallbacks
"""

import asyncio
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Union
import structlog

from ..config import WorkflowConfig, config
from ..errors import (
    DuplicateTicketFound, FailedToCancelPnr, FailedToCancelTicket, GetPnrError,
    MissingPaxListAndBooking, NoReservationToImport, NoValidFare, PNRHasOpenTickets,
    PnrParseError, RequestInconsistency, SegmentBookingFailed, TicketInfoIncomplete,
    TicketingFoidRequired, UnableToAddExtraSegment, UnableToCancelTicketStatusNotOpen,
    UnableToImportPnr, UnableToOpenPNRInTerminal, UnableToRetrieveTickets,
    UnableToSaveBookingWithExtraSegment
)
from ..interfaces.gds_api import GDSAPIInterface
from ..interfaces.terminal import TerminalFactory, TerminalInterface
from ..types import Booking, BookingSearchResult, DummySegment, PassengerListEntry, TicketData
from ..utils.formatters import format_gds_date
from ..utils.screen_parsers import (
    booking_pnr, pnr_from_ticket_screen, pnr_screen_pattern, search_passengers_list
)
from .passenger_meta import add_passenger_meta

logger = structlog.get_logger()


class AirService:
    """
    Booking workflows (search, price, book, ticket, exchange, cancel)

    Each workflow wraps a primary GDS API call. A small fixed set of error
    kinds triggers one compensating action (cancel a half-created record,
    synthesize a placeholder segment through the terminal, resolve a PNR by
    ticket number, add FOID) followed by a single retry. Every other error
    propagates, or is wrapped in a "failed to X" error carrying it as cause.
    """

    def __init__(
        self,
        gds_client: GDSAPIInterface,
        terminal_factory: TerminalFactory,
        workflow_config: Optional[WorkflowConfig] = None,
    ):
        self.gds = gds_client
        self.terminal_factory = terminal_factory
        self.settings = workflow_config or config.workflow

    def _today(self) -> date:
        return date.today()

    def _now(self) -> datetime:
        return datetime.now().astimezone()

    async def _close_quietly(self, terminal: TerminalInterface) -> None:
        """Close a terminal session without masking the error being handled"""
        try:
            await terminal.close_session()
        except Exception as e:
            logger.warning("Failed to close terminal session", error=str(e))

    # Pass-through operations

    async def shop(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Search low fares"""
        return await self.gds.search_low_fares(params)

    async def price(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Price an itinerary"""
        return await self.gds.air_price(params)

    async def to_queue(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Place a PNR on a queue"""
        return await self.gds.gds_queue(params)

    async def flight_info(self, criteria: Union[Dict[str, Any], List[Dict[str, Any]]]) -> Any:
        """Get flight information for one or several flights"""
        flight_info_criteria = criteria if isinstance(criteria, list) else [criteria]
        return await self.gds.flight_info(flight_info_criteria=flight_info_criteria)

    # Booking

    async def book(self, params: Dict[str, Any]) -> Any:
        """
        Price the chosen solution and create a reservation

        When segment booking fails or no valid fare remains, the universal
        record created along the way is cancelled before the error is raised.
        """
        pricing = await self.gds.air_price_pricing_solution(params)

        ticket_date = self._now() + timedelta(hours=self.settings.booking_ticket_date_hours_ahead)
        booking_params = {
            "ticket_date": ticket_date.isoformat(timespec="seconds"),
            "action_status_type": self.settings.booking_action_status_type,
            **(pricing or {}),
            **params,
        }
        booking_params = add_passenger_meta(booking_params, today=self._today())

        try:
            return await self.gds.create_reservation(booking_params)
        except (SegmentBookingFailed, NoValidFare) as e:
            locator_code = self._universal_record_locator(e)
            if locator_code is None:
                logger.warning("Reservation failed without universal record locator", error_code=e.error_code)
                raise

            logger.info("Reservation failed, cancelling universal record",
                        error_code=e.error_code, locator_code=locator_code)
            try:
                await self.gds.cancel_ur(locator_code)
            except Exception as cancel_error:
                logger.error("Failed to cancel universal record",
                             locator_code=locator_code, error=str(cancel_error))
                raise
            raise

    @staticmethod
    def _universal_record_locator(error: Exception) -> Optional[str]:
        data = getattr(error, "data", None)
        if not isinstance(data, dict):
            return None
        universal_record = data.get("universal_record") or {}
        return universal_record.get("locator_code")

    # Import

    async def import_pnr(self, pnr: str, **options) -> List[Booking]:
        """
        Import a PNR

        A PNR with no air reservation cannot be imported. In that case a
        placeholder passive segment is added through the terminal, the PNR is
        imported, the placeholder reservation cancelled and the PNR imported
        again.
        """
        try:
            return await self.gds.import_pnr(pnr, **options)
        except NoReservationToImport:
            logger.info("No reservation to import, adding placeholder segment", pnr=pnr)

        terminal = self.terminal_factory()
        try:
            await self._add_placeholder_segment(terminal, pnr)
        except Exception as e:
            await self._close_quietly(terminal)
            logger.error("Placeholder segment sequence failed", pnr=pnr, error=str(e))
            raise UnableToImportPnr(data={"pnr": pnr, **options}, caused_by=e) from e
        await terminal.close_session()

        bookings = await self.gds.import_pnr(pnr, **options)
        await self.gds.cancel_pnr(bookings[0])
        return await self.gds.import_pnr(pnr, **options)

    def _placeholder_segment(self) -> DummySegment:
        return DummySegment(
            airline=self.settings.dummy_segment_airline,
            segment_class=self.settings.dummy_segment_class,
            origin=self.settings.dummy_segment_from,
            destination=self.settings.dummy_segment_to,
            comment=self.settings.dummy_segment_comment,
            segment_date=self._today() + timedelta(days=self.settings.dummy_segment_days_ahead),
        )

    async def _add_placeholder_segment(self, terminal: TerminalInterface, pnr: str) -> None:
        segment = self._placeholder_segment()
        segment_result = segment.result_line()
        pnr_pattern = pnr_screen_pattern(pnr)

        screen = (await terminal.execute_command(f"*{pnr}")).upper()
        if not pnr_pattern.match(screen):
            raise UnableToOpenPNRInTerminal(data={"pnr": pnr, "screen": screen})

        screen = (await terminal.execute_command(segment.command())).upper()
        if segment_result not in screen:
            raise UnableToAddExtraSegment(data={"pnr": pnr, "screen": screen})

        ticketing_date = self._today() + timedelta(days=self.settings.ticketing_limit_days_ahead)
        await terminal.execute_command(f"T.TAU/{format_gds_date(ticketing_date)}")
        await terminal.execute_command("R.UAPI+ER")
        screen = (await terminal.execute_command("ER")).upper()
        if not pnr_pattern.match(screen) or segment_result not in screen:
            raise UnableToSaveBookingWithExtraSegment(data={"pnr": pnr, "screen": screen})

    # Ticketing

    async def ticket(self, pnr: str, **options) -> Any:
        """Issue tickets, adding FOID and retrying once when the GDS requires it"""
        bookings = await self.import_pnr(pnr, **options)
        ticket_params = {
            "pnr": pnr,
            **options,
            "reservation_locator": bookings[0].uapi_reservation_locator,
        }

        try:
            return await self.gds.ticket(ticket_params)
        except TicketingFoidRequired:
            logger.info("FOID required for ticketing, adding FOID", pnr=pnr)

        bookings = await self.import_pnr(pnr, **options)
        await self.gds.foid(bookings[0])
        return await self.gds.ticket(ticket_params)

    async def get_ticket(
        self,
        ticket_number: str,
        pnr: Optional[str] = None,
        uapi_ur_locator: Optional[str] = None,
    ) -> TicketData:
        """Get ticket data, resolving its PNR through the terminal if needed"""
        try:
            return await self.gds.get_ticket(ticket_number, pnr=pnr, uapi_ur_locator=uapi_ur_locator)
        except (TicketInfoIncomplete, DuplicateTicketFound) as e:
            logger.info("Ticket lookup needs PNR, resolving through terminal",
                        ticket_number=ticket_number, error_code=e.error_code)

        resolved_pnr = await self.get_pnr_by_ticket_number(ticket_number)
        bookings = await self.import_pnr(resolved_pnr)
        return await self.gds.get_ticket(
            ticket_number,
            pnr=bookings[0].pnr,
            uapi_ur_locator=bookings[0].uapi_ur_locator,
        )

    async def get_pnr_by_ticket_number(self, ticket_number: str) -> str:
        """Find the PNR of a ticket with a *TE terminal display"""
        terminal = self.terminal_factory()
        try:
            try:
                screen = await terminal.execute_command(f"*TE/{ticket_number}")
            except Exception:
                await self._close_quietly(terminal)
                raise
            await terminal.close_session()

            pnr = pnr_from_ticket_screen(screen)
            if pnr is None:
                raise PnrParseError(data=screen)
            return pnr

        except Exception as e:
            raise GetPnrError(data={"ticket_number": ticket_number}, caused_by=e) from e

    async def get_tickets(self, pnr: str) -> List[TicketData]:
        """Get ticket data for every ticket of a PNR"""
        try:
            bookings = await self.import_pnr(pnr)
            booking = bookings[0]
            tickets = await asyncio.gather(*[
                self.get_ticket(
                    ticket.number,
                    pnr=booking.pnr,
                    uapi_ur_locator=booking.uapi_ur_locator,
                )
                for ticket in booking.tickets
            ])
            return list(tickets)

        except Exception as e:
            raise UnableToRetrieveTickets(data={"pnr": pnr}, caused_by=e) from e

    # Search

    async def search_bookings_by_passenger_name(self, search_phrase: str) -> BookingSearchResult:
        """
        Search bookings by passenger name

        A list screen is resolved line by line, each in its own session: the
        search is repeated, must return the identical list, and the line is
        then opened to read its PNR.
        """
        terminal = self.terminal_factory()
        try:
            return await self._search_bookings(terminal, search_phrase)
        finally:
            await self._close_quietly(terminal)

    async def _search_bookings(self, terminal: TerminalInterface, search_phrase: str) -> BookingSearchResult:
        command = f"*-{search_phrase}"
        first_screen = await terminal.execute_command(command)

        passengers = search_passengers_list(first_screen)
        if passengers:
            entries = await asyncio.gather(*[
                self._resolve_passenger_pnr(command, first_screen, passenger)
                for passenger in passengers
            ])
            return BookingSearchResult(type="list", data=list(entries))

        pnr = booking_pnr(first_screen)
        if pnr:
            return BookingSearchResult(type="pnr", data=pnr)

        raise MissingPaxListAndBooking(data=first_screen)

    async def _resolve_passenger_pnr(
        self,
        command: str,
        first_screen: str,
        passenger: PassengerListEntry,
    ) -> PassengerListEntry:
        terminal = self.terminal_factory()
        try:
            first_screen_again = await terminal.execute_command(command)
            if first_screen_again != first_screen:
                raise RequestInconsistency(data={
                    "first_screen": first_screen,
                    "first_screen_again": first_screen_again,
                })

            booking_screen = await terminal.execute_command(f"*{passenger.id}")
            pnr = booking_pnr(booking_screen)
        except Exception:
            await self._close_quietly(terminal)
            raise

        await terminal.close_session()
        return passenger.model_copy(update={"pnr": pnr})

    # Cancellation

    async def cancel_ticket(self, ticket_number: str) -> Any:
        """Void a single ticket"""
        try:
            ticket_data = await self.get_ticket(ticket_number)
            return await self.gds.cancel_ticket(pnr=ticket_data.pnr, ticket_number=ticket_number)
        except Exception as e:
            raise FailedToCancelTicket(data={"ticket_number": ticket_number}, caused_by=e) from e

    async def cancel_pnr(self, pnr: str, cancel_tickets: bool = False) -> Any:
        """
        Cancel a PNR

        Tickets whose coupons are all void are ignored. Other tickets block the
        cancellation unless ``cancel_tickets`` is set, and can only be voided
        while every coupon is OPEN or VOID.
        """
        try:
            tickets = await self.get_tickets(pnr)
            await asyncio.gather(*[
                self._void_ticket(pnr, ticket_data, cancel_tickets)
                for ticket_data in tickets
            ])

            bookings = await self.import_pnr(pnr)
            return await self.gds.cancel_pnr(bookings[0])

        except Exception as e:
            raise FailedToCancelPnr(
                data={"pnr": pnr, "cancel_tickets": cancel_tickets},
                caused_by=e
            ) from e

    async def _void_ticket(self, pnr: str, ticket_data: TicketData, cancel_tickets: bool) -> None:
        if ticket_data.all_coupons_void:
            return

        if not cancel_tickets:
            raise PNRHasOpenTickets(data={"pnr": pnr, "ticket_number": ticket_data.ticket_number})

        if not ticket_data.all_coupons_open_or_void:
            raise UnableToCancelTicketStatusNotOpen(data={"pnr": pnr, "ticket_number": ticket_data.ticket_number})

        documents = [
            document for document in ticket_data.tickets
            if document.coupons and not document.coupons[0].is_void
        ]
        for document in documents:
            if not document.ticket_number:
                logger.warning("Skipping ticket document without ticket number",
                               pnr=pnr, ticket_number=ticket_data.ticket_number)

        await asyncio.gather(*[
            self.gds.cancel_ticket(pnr=pnr, ticket_number=document.ticket_number)
            for document in documents
            if document.ticket_number
        ])

    # Exchange

    async def get_exchange_information(self, pnr: str, **options) -> Dict[str, Any]:
        """Quote an exchange for a booking"""
        bookings = await self.import_pnr(pnr)
        created_at = bookings[0].created_at or self._now()
        return await self.gds.exchange_quote({
            "pnr": pnr,
            **options,
            "booking_date": created_at.strftime("%Y-%m-%d"),
        })

    async def exchange_booking(self, pnr: str, exchange_token: str, **options) -> Dict[str, Any]:
        """Confirm an exchange quoted earlier"""
        bookings = await self.import_pnr(pnr)
        return await self.gds.exchange_booking({
            "pnr": pnr,
            "exchange_token": exchange_token,
            **options,
            "uapi_reservation_locator": bookings[0].uapi_reservation_locator,
        })
