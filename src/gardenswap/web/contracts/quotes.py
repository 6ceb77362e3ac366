"""Quote and order-submission contracts exchanged with the swap SDK."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from gardenswap.web.contracts.assets import AssetConfig


class AssetDescriptor(BaseModel):
    """Asset as the swap SDK expects it: chain plus token metadata."""

    model_config = ConfigDict(frozen=True)

    chain: str = Field(..., description="Chain identifier")
    symbol: str
    decimals: int = Field(..., ge=0)
    token_address: str = ""
    atomic_swap_address: str = ""

    @classmethod
    def from_asset(cls, chain: str, asset: AssetConfig) -> "AssetDescriptor":
        return cls(
            chain=chain,
            symbol=asset.symbol,
            decimals=asset.decimals,
            token_address=asset.token_address,
            atomic_swap_address=asset.atomic_swap_address,
        )


class QuoteRequest(BaseModel):
    """Request passed to ``SwapSDK.get_quote``."""

    from_asset: AssetDescriptor
    to_asset: AssetDescriptor
    amount: int = Field(..., ge=0, description="Amount in source base units")
    is_exact_out: bool = False


class AdditionalData(BaseModel):
    """Extra order data: where to receive and which strategy to use."""

    btc_address: str = ""
    strategy_id: str


class SwapRequest(BaseModel):
    """Request passed to ``SwapSDK.swap_and_initiate``."""

    from_asset: AssetDescriptor
    to_asset: AssetDescriptor
    send_amount: str = Field(..., description="Send amount in source base units")
    receive_amount: str = Field(..., description="Quoted receive amount")
    additional_data: AdditionalData


class SdkResult(BaseModel):
    """Explicit ok/error discriminant returned by the swap SDK.

    ``val`` is the SDK's loosely typed payload: ``{"quotes": {...}}`` for a
    quote, ``{"create_order": {"create_id": ...}}`` for an order.
    """

    ok: bool
    val: Optional[dict[str, Any]] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, val: dict[str, Any]) -> "SdkResult":
        return cls(ok=True, val=val)

    @classmethod
    def failure(cls, error: str) -> "SdkResult":
        return cls(ok=False, error=error)


class Quote(BaseModel):
    """Selected quote: a strategy and the amount it will deliver."""

    model_config = ConfigDict(frozen=True)

    strategy_id: str = Field(..., description="Settlement route identifier")
    quote_amount: str = Field(..., description="Receive amount in destination base units")
