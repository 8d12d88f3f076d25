"""
Async client for the grading API.

Sends the API key with every call and unwraps the response envelope, so
callers get ``data`` back or an ``APIClientError``.
"""

import logging
from typing import Any

import httpx

from .auth import API_KEY_HEADER

logger = logging.getLogger(__name__)


class APIClientError(Exception):
    """A failure envelope (or a non-JSON error) returned by the API."""

    def __init__(self, status_code: int, error: str, details: Any = None):
        super().__init__(f"{status_code}: {error}")
        self.status_code = status_code
        self.error = error
        self.details = details


class GradingAPIClient:
    """
    Client for the grading API.

    Usage:
        client = GradingAPIClient("http://localhost:8000", api_key="...")
        stats = await client.get_dashboard_stats()
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        api_prefix: str = "/api",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Root URL of the service (e.g., "http://localhost:8000")
            api_key: Value sent in the x-api-key header
            api_prefix: Path prefix the API routes live under
            timeout: Request timeout in seconds
            transport: Optional httpx transport, e.g. ``httpx.ASGITransport(app)``
        """
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={API_KEY_HEADER: api_key},
            timeout=timeout,
            transport=transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        """Send a request and return the success envelope."""
        try:
            response = await self._client.request(method, f"{self.api_prefix}{path}", **kwargs)
        except httpx.TimeoutException as exc:
            logger.error("Grading API timeout on %s %s", method, path)
            raise APIClientError(504, "Grading API timeout") from exc
        except httpx.RequestError as exc:
            logger.error("Grading API connection error: %s", exc)
            raise APIClientError(503, "Grading API unavailable") from exc

        try:
            body = response.json()
        except ValueError:
            raise APIClientError(response.status_code, response.text or response.reason_phrase)
        if not isinstance(body, dict):
            raise APIClientError(response.status_code, "Unexpected response body", body)

        if response.is_error or not body.get("success", False):
            raise APIClientError(
                response.status_code,
                body.get("error") or response.reason_phrase,
                body.get("details"),
            )
        return body

    async def get_dashboard_stats(self) -> dict[str, Any]:
        return (await self._request("GET", "/analytics/dashboard"))["data"]

    async def get_admin_stats(self, period: str = "month", store_id: str | None = None) -> dict[str, Any]:
        params = {"period": period}
        if store_id:
            params["storeId"] = store_id
        return (await self._request("GET", "/analytics/admin", params=params))["data"]

    async def get_order(self, order_id: str) -> dict[str, Any]:
        return (await self._request("GET", f"/orders/{order_id}"))["data"]["order"]

    async def assign_cards(self, order_id: str, card_ids: list[str]) -> dict[str, Any]:
        """Returns the full envelope so the caller can read ``message``."""
        return await self._request("POST", f"/orders/{order_id}/assign-cards", json={"cardIds": card_ids})

    async def remove_cards(self, order_id: str, card_ids: list[str]) -> dict[str, Any]:
        return await self._request("POST", f"/orders/{order_id}/remove-cards", json={"cardIds": card_ids})

    async def create_customer(self, name: str, phone: str, email: str | None = None) -> dict[str, Any]:
        payload = {"name": name, "phone": phone}
        if email is not None:
            payload["email"] = email
        return (await self._request("POST", "/customers", json=payload))["data"]["customer"]

    async def search_customers(self, q: str, limit: int = 20, offset: int = 0) -> dict[str, Any]:
        params = {"q": q, "limit": limit, "offset": offset}
        return (await self._request("GET", "/customers/search", params=params))["data"]

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "GradingAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
