"""Swap form orchestration: selection, quoting and order submission.

The form state is an immutable ``SwapFormState``; the module-level
transition functions are pure and return a new state. ``SwapOrchestrator``
holds the current state for one session and drives the two SDK calls.

Quote staleness: every change of chain, asset or amount clears the quote
and bumps a token. Quote responses carry the token they were issued with
and are discarded if it is no longer current, so a late response can never
populate a quote for a newer selection.
"""

import logging
import re
from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext
from typing import Callable, Optional

from gardenswap.errors import (
    GardenSwapError,
    InvalidAmount,
    MissingSelection,
    NotReady,
    RemoteRejected,
    TransportFailure,
    WalletNotConnected,
)
from gardenswap.sdk.base import SwapSDK
from gardenswap.wallet import WalletConnection
from gardenswap.web.contracts.assets import AssetConfig
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
from gardenswap.web.services.catalog_service import CatalogService, requires_destination_address

logger = logging.getLogger(__name__)

QUOTE_ERROR_MESSAGE = "Error getting quote"
SWAP_ERROR_MESSAGE = "Error executing swap"
SWAP_SUCCESS_MESSAGE = "Swap initiated successfully!"

_AMOUNT_RE = re.compile(r"^(\d+\.?\d*|\.\d+)$")

# Floor for the scaling precision; longer inputs widen it
_BASE_UNIT_PRECISION = 80


def to_base_units(amount: str, decimals: int) -> int:
    """Scale a human decimal amount to integer base units.

    Exact decimal arithmetic; digits beyond ``decimals`` are truncated.

    Raises:
        InvalidAmount: if ``amount`` is not an unsigned base-10 decimal
    """
    text = (amount or "").strip()
    if not _AMOUNT_RE.match(text):
        raise InvalidAmount(f"Invalid amount: {amount!r}")
    try:
        with localcontext() as ctx:
            ctx.prec = max(_BASE_UNIT_PRECISION, len(text) + decimals)
            ctx.rounding = ROUND_DOWN
            scaled = Decimal(text).scaleb(decimals)
            return int(scaled.to_integral_value(rounding=ROUND_DOWN))
    except InvalidOperation as e:
        raise InvalidAmount(f"Invalid amount: {amount!r}") from e


# ----------------------------------------------------------------------
# Pure transitions
# ----------------------------------------------------------------------


def select_source_chain(state: SwapFormState, chain_id: str) -> SwapFormState:
    return state.model_copy(update={"source_chain": chain_id, "source_asset": None, "quote": None})


def select_destination_chain(state: SwapFormState, chain_id: str) -> SwapFormState:
    return state.model_copy(
        update={"destination_chain": chain_id, "destination_asset": None, "quote": None}
    )


def select_source_asset(
    state: SwapFormState, catalog: CatalogService, asset: Optional[AssetConfig]
) -> SwapFormState:
    """Select the source asset; assets outside the chain's selectable set are ignored."""
    if asset is not None and not catalog.is_selectable(state.source_chain, asset):
        return state
    return state.model_copy(update={"source_asset": asset, "quote": None})


def select_destination_asset(
    state: SwapFormState, catalog: CatalogService, asset: Optional[AssetConfig]
) -> SwapFormState:
    if asset is not None and not catalog.is_selectable(state.destination_chain, asset):
        return state
    return state.model_copy(update={"destination_asset": asset, "quote": None})


def set_amount(state: SwapFormState, amount: str) -> SwapFormState:
    return state.model_copy(update={"amount": amount, "quote": None})


def set_destination_address(state: SwapFormState, address: str) -> SwapFormState:
    # Not part of the quote computation, so the quote survives.
    return state.model_copy(update={"destination_address": address})


def set_quote(state: SwapFormState, quote: Optional[Quote]) -> SwapFormState:
    return state.model_copy(update={"quote": quote})


def set_loading(state: SwapFormState, loading: bool) -> SwapFormState:
    return state.model_copy(update={"loading": loading})


def first_quote(val: Optional[dict]) -> Optional[Quote]:
    """First strategy in the SDK's own iteration order, not the best one."""
    quotes = (val or {}).get("quotes") or {}
    for strategy_id, quote_amount in quotes.items():
        return Quote(strategy_id=str(strategy_id), quote_amount=str(quote_amount))
    return None


def extract_order_id(val: Optional[dict]) -> Optional[str]:
    val = val or {}
    create_order = val.get("create_order") or {}
    order_id = create_order.get("create_id") or val.get("order_id") or val.get("create_id")
    return str(order_id) if order_id else None


# ----------------------------------------------------------------------
# Orchestrator
# ----------------------------------------------------------------------


class SwapOrchestrator:
    """Owns one swap form and coordinates the quote and submit calls.

    ``loading`` is advisory only; nothing here prevents overlapping calls.
    """

    def __init__(
        self,
        sdk: SwapSDK,
        catalog: CatalogService,
        wallet: Optional[WalletConnection] = None,
        notify: Optional[Callable[[Notification], None]] = None,
        state: Optional[SwapFormState] = None,
    ):
        self.sdk = sdk
        self.catalog = catalog
        self.wallet = wallet or WalletConnection.disconnected()
        self.state = state or SwapFormState()
        self.notifications: list[Notification] = []
        self._notify = notify
        self._quote_token = 0

    # --- notifications -------------------------------------------------

    def _emit(self, level: NotificationLevel, message: str) -> None:
        notification = Notification(level=level, message=message)
        self.notifications.append(notification)
        if self._notify is not None:
            self._notify(notification)

    def _fail(self, error: GardenSwapError, **extra) -> ActionResult:
        self._emit(NotificationLevel.ERROR, error.message)
        return ActionResult(success=False, error_kind=error.kind, message=error.message, **extra)

    # --- selection -----------------------------------------------------

    def _invalidate_quote(self) -> None:
        self._quote_token += 1

    @property
    def requires_destination_address(self) -> bool:
        return requires_destination_address(self.state.destination_chain)

    def select_source_chain(self, chain_id: str) -> SwapFormState:
        self.state = select_source_chain(self.state, chain_id)
        self._invalidate_quote()
        return self.state

    def select_destination_chain(self, chain_id: str) -> SwapFormState:
        self.state = select_destination_chain(self.state, chain_id)
        self._invalidate_quote()
        return self.state

    def select_source_asset(self, asset: Optional[AssetConfig]) -> SwapFormState:
        new_state = select_source_asset(self.state, self.catalog, asset)
        if new_state is not self.state:
            self.state = new_state
            self._invalidate_quote()
        return self.state

    def select_destination_asset(self, asset: Optional[AssetConfig]) -> SwapFormState:
        new_state = select_destination_asset(self.state, self.catalog, asset)
        if new_state is not self.state:
            self.state = new_state
            self._invalidate_quote()
        return self.state

    def select_source_asset_by_address(self, token_address: str) -> SwapFormState:
        asset = self.catalog.find_asset(self.state.source_chain, token_address)
        if asset is None:
            logger.debug("Ignoring unknown source asset %s", token_address)
            return self.state
        return self.select_source_asset(asset)

    def select_destination_asset_by_address(self, token_address: str) -> SwapFormState:
        asset = self.catalog.find_asset(self.state.destination_chain, token_address)
        if asset is None:
            logger.debug("Ignoring unknown destination asset %s", token_address)
            return self.state
        return self.select_destination_asset(asset)

    def set_amount(self, amount: str) -> SwapFormState:
        self.state = set_amount(self.state, amount)
        self._invalidate_quote()
        return self.state

    def set_destination_address(self, address: str) -> SwapFormState:
        self.state = set_destination_address(self.state, address)
        return self.state

    def set_wallet(self, wallet: WalletConnection) -> None:
        self.wallet = wallet

    # --- descriptors ---------------------------------------------------

    def _descriptors(self) -> tuple[AssetDescriptor, AssetDescriptor]:
        state = self.state
        if state.source_asset is None or state.destination_asset is None:
            raise MissingSelection("Please select both from and to assets")
        return (
            AssetDescriptor.from_asset(state.source_chain, state.source_asset),
            AssetDescriptor.from_asset(state.destination_chain, state.destination_asset),
        )

    # --- quote ---------------------------------------------------------

    async def request_quote(self) -> ActionResult:
        """Fetch quotes for the current selection and keep the first one."""
        try:
            from_asset, to_asset = self._descriptors()
            amount = to_base_units(self.state.amount, from_asset.decimals)
        except (MissingSelection, InvalidAmount) as e:
            return self._fail(e)

        request = QuoteRequest(
            from_asset=from_asset,
            to_asset=to_asset,
            amount=amount,
            is_exact_out=False,
        )

        self._quote_token += 1
        token = self._quote_token
        self.state = set_loading(self.state, True)
        try:
            failure: Optional[GardenSwapError] = None
            result: Optional[SdkResult] = None
            try:
                result = await self.sdk.get_quote(request)
            except Exception as e:
                logger.error(f"Error getting quote: {e}")
                failure = TransportFailure(QUOTE_ERROR_MESSAGE)

            if token != self._quote_token:
                logger.info(
                    "Discarding stale quote response (token %d, current %d)",
                    token, self._quote_token,
                )
                return ActionResult(success=False, stale=True, message="Selection changed")

            if failure is not None:
                raise failure
            if not result.ok:
                raise RemoteRejected(result.error or QUOTE_ERROR_MESSAGE)

            quote = first_quote(result.val)
            if quote is None:
                raise RemoteRejected("No quotes available")

            self.state = set_quote(self.state, quote)
            logger.info(
                "Quote %s: %s %s -> %s %s",
                quote.strategy_id, amount, from_asset.symbol, quote.quote_amount, to_asset.symbol,
            )
            return ActionResult(success=True, quote=quote)

        except GardenSwapError as e:
            return self._fail(e)
        finally:
            self.state = set_loading(self.state, False)

    # --- submit --------------------------------------------------------

    async def submit_swap(self) -> ActionResult:
        """Create and initiate an order for the current quote."""
        state = self.state
        try:
            if state.quote is None or state.source_asset is None or state.destination_asset is None:
                raise NotReady("Please get a quote first")
            if not self.wallet.is_connected:
                raise WalletNotConnected("Please connect your wallet first")
            from_asset, to_asset = self._descriptors()
            # The amount field may have been edited since the quote; use it as is.
            send_amount = to_base_units(state.amount, from_asset.decimals)
        except GardenSwapError as e:
            return self._fail(e)

        quote = state.quote
        request = SwapRequest(
            from_asset=from_asset,
            to_asset=to_asset,
            send_amount=str(send_amount),
            receive_amount=quote.quote_amount,
            additional_data=AdditionalData(
                btc_address=state.destination_address,
                strategy_id=quote.strategy_id,
            ),
        )

        self.state = set_loading(self.state, True)
        try:
            try:
                result: SdkResult = await self.sdk.swap_and_initiate(request)
            except Exception as e:
                logger.error(f"Error executing swap: {e}")
                raise TransportFailure(SWAP_ERROR_MESSAGE) from e

            if not result.ok:
                raise RemoteRejected(result.error or SWAP_ERROR_MESSAGE)

            order_id = extract_order_id(result.val)
            logger.info("Order created: %s (strategy %s)", order_id, quote.strategy_id)

            # A fresh quote is required before the next submission.
            self.state = set_quote(self.state, None)
            self._invalidate_quote()

            message = SWAP_SUCCESS_MESSAGE if not order_id else f"{SWAP_SUCCESS_MESSAGE} Order: {order_id}"
            self._emit(NotificationLevel.SUCCESS, message)
            return ActionResult(success=True, order_id=order_id, message=message)

        except GardenSwapError as e:
            return self._fail(e, quote=quote)
        finally:
            self.state = set_loading(self.state, False)
