"""Order history endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from gardenswap.config import PER_PAGE_CHOICES, get_settings
from gardenswap.web.contracts.orders import OrderHistoryResponse
from gardenswap.web.dependencies import get_history_service
from gardenswap.web.services.history_service import OrderHistoryService, OrderHistoryView

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("/{address}", response_model=OrderHistoryResponse)
async def get_order_history(
    address: str,
    page: int = Query(default=1, ge=1),
    per_page: Optional[int] = Query(default=None),
    service: OrderHistoryService = Depends(get_history_service),
) -> OrderHistoryResponse:
    """Get one page of a wallet's matched orders, newest first.

    Fetch failures return an empty page rather than an HTTP error.
    """
    per_page = per_page or get_settings().default_per_page
    if per_page not in PER_PAGE_CHOICES:
        raise HTTPException(
            status_code=422,
            detail=f"per_page must be one of {list(PER_PAGE_CHOICES)}",
        )

    view = OrderHistoryView(service, address=address, per_page=per_page)
    view.page = page
    await view.refresh()
    return view.to_response()
