"""Dry-run swap SDK for local use and demos.

Quotes come from a static price table; orders are kept in memory and never
touch a chain.
"""

import hashlib
import time
from datetime import datetime, timezone
from decimal import ROUND_DOWN, Decimal
from typing import Optional

from gardenswap.sdk.base import SwapSDK
from gardenswap.web.contracts.quotes import AssetDescriptor, QuoteRequest, SdkResult, SwapRequest

# Simulated USD prices. Demonstration only.
SIMULATED_PRICES: dict[str, Decimal] = {
    "BTC": Decimal("100000.00"),
    "WBTC": Decimal("100000.00"),
    "CBBTC": Decimal("100000.00"),
    "TBTC": Decimal("100000.00"),
    "ETH": Decimal("3900.00"),
    "WETH": Decimal("3900.00"),
    "USDC": Decimal("1.00"),
    "USDT": Decimal("1.00"),
    "SEED": Decimal("0.25"),
    "HYPE": Decimal("25.00"),
}

# (strategy suffix, fee) in the order the SDK reports them
STRATEGY_FEES: list[tuple[str, Decimal]] = [
    ("a", Decimal("0.003")),
    ("b", Decimal("0.005")),
]


class DryRunSDK(SwapSDK):
    """Simulated swap SDK.

    Produces two strategies per pair, the cheaper one first, and records
    every created order in ``self.orders``.
    """

    def __init__(self, prices: Optional[dict[str, Decimal]] = None):
        self._prices = dict(prices or SIMULATED_PRICES)
        self.orders: list[dict] = []

    @property
    def name(self) -> str:
        return "dry_run"

    def set_price(self, symbol: str, price: Decimal) -> None:
        """Set simulated price for an asset."""
        self._prices[symbol.upper()] = price

    def get_price(self, symbol: str) -> Optional[Decimal]:
        return self._prices.get(symbol.upper())

    @staticmethod
    def _strategy_id(from_asset: AssetDescriptor, to_asset: AssetDescriptor, suffix: str) -> str:
        pair = f"{from_asset.chain}:{from_asset.symbol}->{to_asset.chain}:{to_asset.symbol}"
        return hashlib.sha256(pair.encode()).hexdigest()[:8] + suffix

    async def get_quote(self, request: QuoteRequest) -> SdkResult:
        from_price = self.get_price(request.from_asset.symbol)
        to_price = self.get_price(request.to_asset.symbol)

        if from_price is None or to_price is None:
            return SdkResult.failure(
                f"Unsupported pair {request.from_asset.symbol}/{request.to_asset.symbol}"
            )

        if request.amount <= 0:
            return SdkResult.failure("Amount must be greater than zero")

        amount = Decimal(request.amount).scaleb(-request.from_asset.decimals)
        base_to_amount = amount * from_price / to_price

        quotes: dict[str, str] = {}
        for suffix, fee in STRATEGY_FEES:
            to_amount = base_to_amount * (1 - fee)
            to_base = to_amount.scaleb(request.to_asset.decimals).to_integral_value(rounding=ROUND_DOWN)
            if to_base <= 0:
                continue
            quotes[self._strategy_id(request.from_asset, request.to_asset, suffix)] = str(int(to_base))

        if not quotes:
            return SdkResult.failure("Amount too small to quote")

        return SdkResult.success({"quotes": quotes})

    async def swap_and_initiate(self, request: SwapRequest) -> SdkResult:
        if int(request.send_amount) <= 0:
            return SdkResult.failure("Send amount must be greater than zero")

        order_data = (
            f"{request.from_asset.chain}{request.to_asset.chain}"
            f"{request.send_amount}{request.additional_data.strategy_id}{time.time()}"
        )
        create_id = hashlib.sha256(order_data.encode()).hexdigest()

        create_order = {
            "create_id": create_id,
            "source_chain": request.from_asset.chain,
            "destination_chain": request.to_asset.chain,
            "source_asset": request.from_asset.atomic_swap_address or request.from_asset.symbol,
            "destination_asset": request.to_asset.atomic_swap_address or request.to_asset.symbol,
            "source_amount": request.send_amount,
            "destination_amount": request.receive_amount,
            "additional_data": request.additional_data.model_dump(),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self.orders.append(create_order)

        return SdkResult.success({"create_order": create_order, "simulated": True})
