"""
GDS API client for air operations
"""

import time
import httpx
from typing import Any, Dict, List, Optional
from pydantic_core import to_jsonable_python

from ..config import config
from ..errors import GDSAPIError, error_from_code
from ..interfaces.gds_api import GDSAPIInterface
from ..types import Booking, TicketData
from ..utils.logger import get_logger, log_remote_call

logger = get_logger(__name__)


class GDSAPIClient(GDSAPIInterface):
    """HTTP client for the GDS air gateway

    Every operation is a ``POST /air/<operation>`` with a JSON body. The
    gateway answers ``{"result": ...}`` on success and
    ``{"error": {"code", "message", "data"}}`` on failure; error codes are
    turned into the matching error kind so workflows can react to them.
    """

    def __init__(
        self,
        base_url: str = None,
        username: str = None,
        password: str = None,
        target_branch: str = None,
        timeout: float = None,
        transport: httpx.AsyncBaseTransport = None,
    ):
        self.base_url = base_url or config.gds_api.base_url
        self.username = username or config.gds_api.username
        self.password = password or config.gds_api.password
        self.target_branch = target_branch or config.gds_api.target_branch
        self.timeout = timeout or config.gds_api.timeout

        headers = {
            "Content-Type": "application/json",
            "User-Agent": "gds-air-service/1.0"
        }
        if self.target_branch:
            headers["X-Target-Branch"] = self.target_branch

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            auth=(self.username, self.password) if self.username else None,
            headers=headers,
            transport=transport,
        )

    async def _call(self, operation: str, payload: Any) -> Any:
        """Send an operation to the gateway and unwrap its result"""
        start_time = time.perf_counter()
        success = False

        try:
            response = await self.client.post(f"/air/{operation}", json=to_jsonable_python(payload))
            result = self._unwrap(operation, response)
            success = True
            return result

        except httpx.TimeoutException as e:
            raise GDSAPIError(f"Timeout calling {operation}: {str(e)}", 504, "TIMEOUT_ERROR") from e
        except httpx.RequestError as e:
            raise GDSAPIError(f"Connection error: {str(e)}", 503, "CONNECTION_ERROR") from e
        finally:
            log_remote_call("gds", operation, time.perf_counter() - start_time, success)

    @staticmethod
    def _unwrap(operation: str, response: httpx.Response) -> Any:
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("error"):
            error = body["error"]
            logger.info(
                "GDS reported error",
                operation=operation,
                code=error.get("code"),
                status_code=response.status_code
            )
            raise error_from_code(error.get("code"), data=error.get("data"), message=error.get("message"))

        if response.status_code >= 400:
            raise GDSAPIError(f"HTTP error: {response.status_code}", response.status_code, "HTTP_ERROR")

        if body is None:
            raise GDSAPIError(f"Invalid response for {operation}", 502, "INVALID_RESPONSE")

        if isinstance(body, dict) and "result" in body:
            return body["result"]
        return body

    async def search_low_fares(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("search_low_fares", params)

    async def air_price(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("price", params)

    async def air_price_pricing_solution(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("price_pricing_solution", params)

    async def gds_queue(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("queue", params)

    async def create_reservation(self, params: Dict[str, Any]) -> Any:
        return await self._call("create_reservation", params)

    async def cancel_ur(self, locator_code: str) -> Dict[str, Any]:
        return await self._call("cancel_ur", {"locator_code": locator_code})

    async def import_pnr(self, pnr: str, **options) -> List[Booking]:
        """Import a PNR, one Booking per reservation in the universal record"""
        result = await self._call("import_pnr", {"pnr": pnr, **options})
        return [Booking.model_validate(item) for item in result]

    async def cancel_pnr(self, booking: Booking) -> Any:
        return await self._call("cancel_pnr", booking.model_dump(exclude_none=True))

    async def ticket(self, params: Dict[str, Any]) -> Any:
        return await self._call("ticket", params)

    async def foid(self, booking: Booking) -> Any:
        return await self._call("foid", booking.model_dump(exclude_none=True))

    async def flight_info(self, flight_info_criteria: List[Dict[str, Any]]) -> Any:
        return await self._call("flight_info", {"flight_info_criteria": flight_info_criteria})

    async def get_ticket(
        self,
        ticket_number: str,
        pnr: Optional[str] = None,
        uapi_ur_locator: Optional[str] = None,
    ) -> TicketData:
        payload = {"ticket_number": ticket_number}
        if pnr:
            payload["pnr"] = pnr
        if uapi_ur_locator:
            payload["uapi_ur_locator"] = uapi_ur_locator

        result = await self._call("get_ticket", payload)
        return TicketData.model_validate(result)

    async def cancel_ticket(self, pnr: str, ticket_number: str) -> Any:
        return await self._call("cancel_ticket", {"pnr": pnr, "ticket_number": ticket_number})

    async def exchange_quote(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("exchange_quote", params)

    async def exchange_booking(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("exchange_booking", params)

    async def close(self):
        """Close the HTTP client"""
        await self.client.aclose()
