"""Order history projection.

Fetches one server-side page of matched orders for a wallet, normalizes the
loosely shaped items into ``OrderRecord`` and sorts the page newest first.
Page boundaries come from the server; sorting never crosses them.
"""

import logging
from typing import Any, Iterable, Optional

from gardenswap.clients.garden_api import GardenApiClient
from gardenswap.config import PER_PAGE_CHOICES, get_settings
from gardenswap.errors import GardenSwapError, MalformedResponse
from gardenswap.web.contracts.orders import (
    OrderHistoryResponse,
    OrderPage,
    OrderRecord,
    OrderStatus,
)
from gardenswap.web.services.display import timestamp_sort_key, to_row

logger = logging.getLogger(__name__)


def _section(raw: dict, key: str) -> dict:
    value = raw.get(key)
    return value if isinstance(value, dict) else {}


def first_present(*values: Any) -> Optional[str]:
    """First non-empty value, as a string."""
    for value in values:
        if value is not None and value != "":
            return str(value)
    return None


def derive_status(initiate_tx_hash: Optional[str], redeem_tx_hash: Optional[str]) -> OrderStatus:
    """Redeem beats initiate beats nothing."""
    if redeem_tx_hash:
        return OrderStatus.COMPLETED
    if initiate_tx_hash:
        return OrderStatus.IN_PROGRESS
    return OrderStatus.PENDING


def normalize_order(raw: dict) -> OrderRecord:
    """Build an ``OrderRecord`` from one matched-order item.

    Each field takes the first non-empty value from its fallback chain:

    - created_at: top-level, create_order, source_swap, destination_swap
    - order_id: create_order.create_id, top-level order_id
    - source chain/asset/amount: source_swap, then create_order.source_*
    - destination chain/asset/amount: destination_swap, then
      create_order.destination_*
    - initiate tx: source_swap.initiate_tx_hash
    - redeem tx: destination_swap.redeem_tx_hash, then source_swap's
    """
    if not isinstance(raw, dict):
        raise MalformedResponse(f"Order item is not an object: {type(raw).__name__}")

    create_order = _section(raw, "create_order")
    source_swap = _section(raw, "source_swap")
    destination_swap = _section(raw, "destination_swap")

    initiate_tx = first_present(source_swap.get("initiate_tx_hash"))
    redeem_tx = first_present(
        destination_swap.get("redeem_tx_hash"),
        source_swap.get("redeem_tx_hash"),
    )

    return OrderRecord(
        order_id=first_present(create_order.get("create_id"), raw.get("order_id")),
        created_at=first_present(
            raw.get("created_at"),
            create_order.get("created_at"),
            source_swap.get("created_at"),
            destination_swap.get("created_at"),
        ),
        source_chain=first_present(source_swap.get("chain"), create_order.get("source_chain")),
        destination_chain=first_present(
            destination_swap.get("chain"), create_order.get("destination_chain")
        ),
        source_asset=first_present(source_swap.get("asset"), create_order.get("source_asset")),
        destination_asset=first_present(
            destination_swap.get("asset"), create_order.get("destination_asset")
        ),
        source_amount=first_present(source_swap.get("amount"), create_order.get("source_amount")),
        destination_amount=first_present(
            destination_swap.get("amount"), create_order.get("destination_amount")
        ),
        initiate_tx_hash=initiate_tx,
        redeem_tx_hash=redeem_tx,
        status=derive_status(initiate_tx, redeem_tx),
    )


def sort_orders(records: Iterable[OrderRecord]) -> list[OrderRecord]:
    """Newest first; unparsable timestamps count as epoch 0 and sink to the end."""
    return sorted(records, key=lambda r: timestamp_sort_key(r.created_at), reverse=True)


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value) if value else default
    except (TypeError, ValueError):
        return default


class OrderHistoryService:
    """Fetches and normalizes pages of a wallet's matched orders."""

    def __init__(self, client: Optional[GardenApiClient] = None):
        self._client = client or GardenApiClient()

    async def fetch_page(self, address: Optional[str], page: int = 1, per_page: int = 10) -> OrderPage:
        """Fetch one page; failures degrade to an empty page and are never raised."""
        if not address:
            return OrderPage.empty(page, per_page, address_required=True)

        try:
            result = await self._client.get_matched_orders(address, page, per_page)
            records = [normalize_order(item) for item in result.get("data") or []]
        except GardenSwapError as e:
            logger.error(f"Failed to fetch orders for {address}: {e}")
            return OrderPage.empty(page, per_page)

        return OrderPage(
            items=sort_orders(records),
            page=page,
            per_page=per_page,
            total_pages=_as_int(result.get("total_pages"), 1),
            total_items=_as_int(result.get("total_items"), 0),
        )


class OrderHistoryView:
    """Pagination state for the order history screen.

    Every control (address, page, page size, refresh) refetches through
    ``refresh``. A response from a fetch that has since been superseded is
    dropped.
    """

    def __init__(
        self,
        service: OrderHistoryService,
        address: Optional[str] = None,
        per_page: Optional[int] = None,
    ):
        self.service = service
        self.address = address
        self.page = 1
        self.per_page = per_page or get_settings().default_per_page
        if self.per_page not in PER_PAGE_CHOICES:
            raise ValueError(f"per_page must be one of {PER_PAGE_CHOICES}")
        self.items: list[OrderRecord] = []
        self.total_pages = 1
        self.total_items = 0
        self.loading = False
        self._fetch_seq = 0

    @property
    def address_required(self) -> bool:
        return not self.address

    async def refresh(self) -> list[OrderRecord]:
        self._fetch_seq += 1
        seq = self._fetch_seq

        self.loading = True
        try:
            result = await self.service.fetch_page(self.address, self.page, self.per_page)
        finally:
            if seq == self._fetch_seq:
                self.loading = False

        if seq != self._fetch_seq:
            logger.info("Discarding superseded order history response (page %d)", result.page)
            return self.items

        self.items = result.items
        self.total_pages = result.total_pages
        self.total_items = result.total_items
        return self.items

    async def set_address(self, address: Optional[str]) -> list[OrderRecord]:
        self.address = address
        return await self.refresh()

    async def set_page(self, page: int) -> list[OrderRecord]:
        self.page = max(1, min(page, self.total_pages or 1))
        return await self.refresh()

    async def next_page(self) -> list[OrderRecord]:
        return await self.set_page(self.page + 1)

    async def prev_page(self) -> list[OrderRecord]:
        return await self.set_page(self.page - 1)

    async def set_per_page(self, per_page: int) -> list[OrderRecord]:
        if per_page not in PER_PAGE_CHOICES:
            raise ValueError(f"per_page must be one of {PER_PAGE_CHOICES}")
        self.per_page = per_page
        self.page = 1
        return await self.refresh()

    def to_response(self, explorer_url: Optional[str] = None) -> OrderHistoryResponse:
        message = None
        if self.address_required:
            message = "Please connect your wallet to view transaction history."
        elif not self.items:
            message = "No transactions found."
        return OrderHistoryResponse(
            success=True,
            address=self.address,
            rows=[to_row(record, explorer_url) for record in self.items],
            page=self.page,
            per_page=self.per_page,
            total_pages=self.total_pages,
            total_items=self.total_items,
            message=message,
        )
