"""
HTTP client for the booking API, as used by the mobile app.

Every call returns the decoded JSON body, whatever the status code: the API
reports rejections as {"success": false, "error": ...}. Only transport failures
and bodies that are not JSON raise BackendConnectionError.
"""

import logging
from typing import Any, Optional

import httpx

from ..config import BACKEND_URL, HTTP_TIMEOUT

logger = logging.getLogger(__name__)


class BackendConnectionError(Exception):
    """The backend could not be reached or answered with something other than JSON"""


class BookingApiClient:
    """Async client for the booking and admin endpoints"""

    def __init__(
        self,
        base_url: str = BACKEND_URL,
        timeout: float = HTTP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(method, url, json=json)
        except httpx.HTTPError as e:
            logger.error(f"❌ {method} {path} failed: {e}")
            raise BackendConnectionError(str(e)) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"❌ {method} {path} returned non-JSON body (status {response.status_code})")
            raise BackendConnectionError("Invalid response from server") from e

        if not isinstance(data, dict):
            raise BackendConnectionError("Invalid response from server")

        if response.status_code >= 400:
            logger.warning(f"⚠️ {method} {path} -> {response.status_code}: {data.get('error')}")
        return data

    async def create_booking(self, submission: dict) -> dict[str, Any]:
        return await self._request("POST", "/api/bookings", json=submission)

    async def check_availability(self, date: str) -> dict[str, Any]:
        return await self._request("GET", f"/api/bookings/availability/{date}")

    async def list_bookings(self) -> dict[str, Any]:
        return await self._request("GET", "/api/admin/bookings")

    async def complete_booking(self, booking_id: str) -> dict[str, Any]:
        return await self._request("PUT", f"/api/admin/bookings/{booking_id}/complete")

    async def list_customers(self) -> dict[str, Any]:
        return await self._request("GET", "/api/admin/customers")

    async def get_customer(self, customer_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/api/admin/customers/{customer_id}")

    async def create_customer(self, customer: dict) -> dict[str, Any]:
        return await self._request("POST", "/api/admin/customers", json=customer)

    async def update_customer(self, customer_id: str, customer: dict) -> dict[str, Any]:
        return await self._request("PUT", f"/api/admin/customers/{customer_id}", json=customer)
