"""Order history contracts."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderStatus(str, Enum):
    """Status derived from the transactions seen so far."""

    COMPLETED = "Completed"
    IN_PROGRESS = "In Progress"
    PENDING = "Pending"


class OrderRecord(BaseModel):
    """One past swap, normalized from the matched-orders payload."""

    model_config = ConfigDict(frozen=True)

    order_id: Optional[str] = None
    created_at: Optional[str] = None
    source_chain: Optional[str] = None
    destination_chain: Optional[str] = None
    source_asset: Optional[str] = None
    destination_asset: Optional[str] = None
    source_amount: Optional[str] = None
    destination_amount: Optional[str] = None
    initiate_tx_hash: Optional[str] = None
    redeem_tx_hash: Optional[str] = None
    status: OrderStatus = OrderStatus.PENDING


class OrderPage(BaseModel):
    """One server-side page of normalized orders."""

    items: list[OrderRecord] = Field(default_factory=list)
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=10, ge=1)
    total_pages: int = 1
    total_items: int = 0
    address_required: bool = False

    @classmethod
    def empty(cls, page: int, per_page: int, address_required: bool = False) -> "OrderPage":
        return cls(page=page, per_page=per_page, address_required=address_required)


class OrderRow(BaseModel):
    """Display projection of an ``OrderRecord`` for the history table."""

    date: str
    order_id: str
    order_id_short: str
    order_url: Optional[str] = None
    status: OrderStatus
    source_chain: str
    destination_chain: str
    amounts: str
    assets: str
    initiate_tx: Optional[str] = None
    initiate_tx_url: Optional[str] = None
    redeem_tx: Optional[str] = None
    redeem_tx_url: Optional[str] = None


class OrderHistoryResponse(BaseModel):
    """Response for the order history screen."""

    success: bool = True
    address: Optional[str] = None
    rows: list[OrderRow] = Field(default_factory=list)
    page: int = 1
    per_page: int = 10
    total_pages: int = 1
    total_items: int = 0
    message: Optional[str] = None
