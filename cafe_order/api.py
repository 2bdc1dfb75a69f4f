"""HTTP client for the café backend."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from cafe_order.config import resolve_api_base_url, resolve_http_timeout
from cafe_order.errors import NetworkFailure

logger = logging.getLogger(__name__)


class CafeApiClient:
    """Client for loading the menu and submitting orders."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or resolve_api_base_url()).rstrip("/")
        self.client = httpx.AsyncClient(
            timeout=timeout if timeout is not None else resolve_http_timeout(),
            transport=transport,
        )

    async def __aenter__(self) -> CafeApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %r", method, url, exc)
            raise NetworkFailure(f"Could not reach the server: {exc}") from exc

        if not response.is_success:
            logger.warning("%s %s returned %d", method, url, response.status_code)
            raise NetworkFailure(
                f"Server responded with {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise NetworkFailure("Server returned an unreadable response") from exc

    async def fetch_menu(self) -> list[Any]:
        """Fetch the flat list of menu records."""
        data = await self._request("GET", "/menu")
        if not isinstance(data, list):
            raise NetworkFailure("Menu response is not a list of records")
        logger.info("fetched %d menu record(s)", len(data))
        return data

    async def post_order(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Submit an order payload and return the decoded response object."""
        data = await self._request("POST", "/orders", json=payload)
        if not isinstance(data, dict):
            raise NetworkFailure("Order response is not an object")
        return data

    async def aclose(self) -> None:
        await self.client.aclose()
