"""Async client for the Garden REST API.

Only the two read-only endpoints the app needs:
- GET /info/assets
- GET /orders/user/{address}/matched
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from gardenswap.config import get_settings
from gardenswap.errors import MalformedResponse, RemoteRejected, TransportFailure

logger = logging.getLogger(__name__)


class GardenApiClient:
    """Thin wrapper over ``httpx.AsyncClient`` for the Garden REST API.

    Raises ``TransportFailure`` for network/HTTP errors and
    ``MalformedResponse`` when the payload does not have the expected shape.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.garden_api_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self._http_client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def _get_json(self, url: str, params: Optional[dict] = None) -> Any:
        client = await self._get_client()
        try:
            response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            raise TransportFailure(f"Request to {url} failed: {e}") from e

        if response.status_code != 200:
            raise TransportFailure(f"HTTP error! status: {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(f"Invalid JSON from {url}: {e}") from e

    async def get_assets(self) -> dict[str, Any]:
        """Fetch the raw chain-id -> chain mapping."""
        data = await self._get_json(f"{self.base_url}/info/assets")
        if not isinstance(data, dict):
            raise MalformedResponse(f"Expected object from /info/assets, got {type(data).__name__}")
        return data

    async def get_matched_orders(self, address: str, page: int, per_page: int) -> dict[str, Any]:
        """Fetch one page of matched orders for a wallet.

        Returns:
            The ``result`` object: data, page, per_page, total_pages, total_items
        """
        url = f"{self.base_url}/orders/user/{quote(address, safe='')}/matched"
        data = await self._get_json(url, params={"page": page, "per_page": per_page})

        if not isinstance(data, dict):
            raise MalformedResponse("Matched orders response is not an object")

        status = data.get("status")
        if status != "Ok":
            raise RemoteRejected(f"Matched orders status: {status!r}")

        result = data.get("result")
        if not isinstance(result, dict):
            raise MalformedResponse("Matched orders response missing 'result'")

        items = result.get("data")
        if items is not None and not isinstance(items, list):
            raise MalformedResponse("Matched orders 'result.data' is not a list")

        logger.debug(
            "Fetched %d matched orders for %s (page=%s per_page=%s)",
            len(items or []), address, page, per_page,
        )
        return result
