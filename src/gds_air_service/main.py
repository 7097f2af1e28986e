"""
Main application entry point
"""

import uvicorn
from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
import structlog
from datetime import datetime
from typing import Any, Dict, List, Union

from . import __version__
from .config import config
from .container import container
from .error_handlers import gds_exception_handler, global_exception_handler, validation_exception_handler
from .errors import GDSServiceError
from .services import AirService
from .types import (
    APIResponse, CancelPNRRequest, ExchangeBookingRequest, PNRRequest,
    PassengerSearchRequest, TicketNumberRequest
)
from .utils.logger import setup_logging

setup_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info("Starting GDS Air Service API", version=__version__)

    await container.initialize()

    yield

    logger.info("Shutting down GDS Air Service API")
    await container.cleanup()


app = FastAPI(
    title="GDS Air Service API",
    description="Airline booking workflows over a GDS API with terminal fallbacks",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if config.server.debug else None,
    redoc_url="/redoc" if config.server.debug else None,
)

app.add_exception_handler(GDSServiceError, gds_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)


def get_air_service() -> AirService:
    """Dependency returning the air workflows from the container"""
    return container.get_air_service()


def completed(data: Any) -> APIResponse:
    return APIResponse(status="completed", data=data)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": __version__,
        "environment": config.server.environment,
        "initialized": container.is_initialized()
    }


@app.post("/api/v1/air/shop", response_model=APIResponse)
async def shop(params: Dict[str, Any] = Body(...), service: AirService = Depends(get_air_service)):
    return completed(await service.shop(params))


@app.post("/api/v1/air/price", response_model=APIResponse)
async def price(params: Dict[str, Any] = Body(...), service: AirService = Depends(get_air_service)):
    return completed(await service.price(params))


@app.post("/api/v1/air/book", response_model=APIResponse)
async def book(params: Dict[str, Any] = Body(...), service: AirService = Depends(get_air_service)):
    return completed(await service.book(params))


@app.post("/api/v1/air/queue", response_model=APIResponse)
async def to_queue(params: Dict[str, Any] = Body(...), service: AirService = Depends(get_air_service)):
    return completed(await service.to_queue(params))


@app.post("/api/v1/air/flight-info", response_model=APIResponse)
async def flight_info(
    criteria: Union[List[Dict[str, Any]], Dict[str, Any]] = Body(...),
    service: AirService = Depends(get_air_service)
):
    return completed(await service.flight_info(criteria))


@app.post("/api/v1/air/bookings/import", response_model=APIResponse)
async def import_pnr(request: PNRRequest, service: AirService = Depends(get_air_service)):
    return completed(await service.import_pnr(request.pnr, **request.options))


@app.post("/api/v1/air/bookings/ticket", response_model=APIResponse)
async def ticket(request: PNRRequest, service: AirService = Depends(get_air_service)):
    return completed(await service.ticket(request.pnr, **request.options))


@app.post("/api/v1/air/bookings/tickets", response_model=APIResponse)
async def get_tickets(request: PNRRequest, service: AirService = Depends(get_air_service)):
    return completed(await service.get_tickets(request.pnr))


@app.post("/api/v1/air/bookings/search", response_model=APIResponse)
async def search_bookings(request: PassengerSearchRequest, service: AirService = Depends(get_air_service)):
    return completed(await service.search_bookings_by_passenger_name(request.search_phrase))


@app.post("/api/v1/air/bookings/cancel", response_model=APIResponse)
async def cancel_pnr(request: CancelPNRRequest, service: AirService = Depends(get_air_service)):
    return completed(await service.cancel_pnr(request.pnr, cancel_tickets=request.cancel_tickets))


@app.post("/api/v1/air/tickets/lookup", response_model=APIResponse)
async def get_ticket(request: TicketNumberRequest, service: AirService = Depends(get_air_service)):
    return completed(await service.get_ticket(request.ticket_number))


@app.post("/api/v1/air/tickets/pnr", response_model=APIResponse)
async def get_pnr_by_ticket_number(request: TicketNumberRequest, service: AirService = Depends(get_air_service)):
    return completed(await service.get_pnr_by_ticket_number(request.ticket_number))


@app.post("/api/v1/air/tickets/cancel", response_model=APIResponse)
async def cancel_ticket(request: TicketNumberRequest, service: AirService = Depends(get_air_service)):
    return completed(await service.cancel_ticket(request.ticket_number))


@app.post("/api/v1/air/exchange/quote", response_model=APIResponse)
async def get_exchange_information(request: PNRRequest, service: AirService = Depends(get_air_service)):
    return completed(await service.get_exchange_information(request.pnr, **request.options))


@app.post("/api/v1/air/exchange/book", response_model=APIResponse)
async def exchange_booking(request: ExchangeBookingRequest, service: AirService = Depends(get_air_service)):
    return completed(await service.exchange_booking(
        request.pnr, request.exchange_token, **request.options
    ))


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests"""
    start_time = datetime.now()

    # Generate request ID for tracing
    request_id = f"req_{int(start_time.timestamp() * 1000)}"
    request.state.request_id = request_id

    logger.info(
        "HTTP request received",
        request_id=request_id,
        method=request.method,
        url=str(request.url)
    )

    response = await call_next(request)

    duration = (datetime.now() - start_time).total_seconds()
    logger.info(
        "HTTP request completed",
        request_id=request_id,
        status_code=response.status_code,
        duration_ms=int(duration * 1000)
    )

    response.headers["X-Request-ID"] = request_id

    return response


def main():
    """Main entry point"""
    uvicorn.run(
        "gds_air_service.main:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.is_development,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
