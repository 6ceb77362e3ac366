"""Request and response contracts for the web layer.

These Pydantic models describe the catalog, the swap form, the swap SDK
requests and the order history.
"""

from gardenswap.web.contracts.assets import (
    AssetConfig,
    AssetListResponse,
    ChainInfo,
    ChainListResponse,
    ChainOption,
)
from gardenswap.web.contracts.orders import (
    OrderHistoryResponse,
    OrderPage,
    OrderRecord,
    OrderRow,
    OrderStatus,
)
from gardenswap.web.contracts.quotes import (
    AdditionalData,
    AssetDescriptor,
    Quote,
    QuoteRequest,
    SdkResult,
    SwapRequest,
)
from gardenswap.web.contracts.swaps import (
    ActionResult,
    Notification,
    NotificationLevel,
    SwapFormState,
)

__all__ = [
    # Catalog contracts
    "AssetConfig",
    "AssetListResponse",
    "ChainInfo",
    "ChainListResponse",
    "ChainOption",
    # SDK contracts
    "AdditionalData",
    "AssetDescriptor",
    "Quote",
    "QuoteRequest",
    "SdkResult",
    "SwapRequest",
    # Swap form contracts
    "ActionResult",
    "Notification",
    "NotificationLevel",
    "SwapFormState",
    # Order history contracts
    "OrderHistoryResponse",
    "OrderPage",
    "OrderRecord",
    "OrderRow",
    "OrderStatus",
]
