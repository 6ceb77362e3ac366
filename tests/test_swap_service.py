"""Tests for the swap form orchestrator."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from gardenswap.errors import ErrorKind, InvalidAmount
from gardenswap.wallet import WalletConnection
from gardenswap.web.contracts.quotes import Quote, SdkResult
from gardenswap.web.contracts.swaps import NotificationLevel, SwapFormState
from gardenswap.web.services.catalog_service import requires_destination_address
from gardenswap.web.services.swap_service import (
    SwapOrchestrator,
    first_quote,
    select_source_chain,
    set_amount,
    set_destination_address,
    to_base_units,
)

WBTC_ADDRESS = "0x29f2D40B0605204364af54EC677bD022dA425d03"


def select_pair(orchestrator: SwapOrchestrator, amount: str = "0.0005") -> None:
    """BTC on bitcoin_testnet -> WBTC on ethereum_sepolia."""
    orchestrator.select_source_chain("bitcoin_testnet")
    orchestrator.select_source_asset_by_address("primary")
    orchestrator.select_destination_chain("ethereum_sepolia")
    orchestrator.select_destination_asset_by_address(WBTC_ADDRESS)
    orchestrator.set_amount(amount)


class TestBaseUnits:
    """Tests for decimal amount scaling."""

    def test_scales_exactly(self):
        assert to_base_units("0.0005", 8) == 50000

    def test_large_amount_keeps_precision(self):
        assert to_base_units("123456789.123456789123456789", 18) == 123456789123456789123456789

    def test_truncates_extra_digits(self):
        assert to_base_units("1.123456789", 8) == 112345678

    def test_long_fraction_never_rounds_up(self):
        assert to_base_units("1." + "9" * 90, 8) == 199999999
        assert to_base_units("9" * 85 + ".999", 2) == int("9" * 85 + "99")

    def test_zero_decimals(self):
        assert to_base_units("42", 0) == 42

    @pytest.mark.parametrize("amount", ["", "abc", "-1", "1e5", "1.2.3", " "])
    def test_rejects_invalid(self, amount):
        with pytest.raises(InvalidAmount):
            to_base_units(amount, 8)


class TestTransitions:
    """Tests for the pure state transitions."""

    def test_transition_returns_new_state(self):
        state = SwapFormState(quote=Quote(strategy_id="s", quote_amount="1"))
        new_state = select_source_chain(state, "bitcoin_testnet")

        assert new_state.source_chain == "bitcoin_testnet"
        assert new_state.quote is None
        # Original untouched
        assert state.source_chain == ""
        assert state.quote is not None

    def test_amount_clears_quote(self):
        state = SwapFormState(quote=Quote(strategy_id="s", quote_amount="1"))
        assert set_amount(state, "1").quote is None

    def test_address_keeps_quote(self):
        quote = Quote(strategy_id="s", quote_amount="1")
        state = set_destination_address(SwapFormState(quote=quote), "tb1qexample")

        assert state.destination_address == "tb1qexample"
        assert state.quote == quote

    def test_first_quote_uses_sdk_order(self):
        quote = first_quote({"quotes": {"zzz": "1", "aaa": "1000"}})
        assert quote == Quote(strategy_id="zzz", quote_amount="1")

    def test_first_quote_empty(self):
        assert first_quote({"quotes": {}}) is None
        assert first_quote(None) is None

    def test_bitcoin_chains_need_address(self):
        assert requires_destination_address("bitcoin_testnet") is True
        assert requires_destination_address("ethereum_sepolia") is False
        assert requires_destination_address("") is False


class TestSelection:
    """Tests for chain and asset selection."""

    @pytest.mark.asyncio
    async def test_chain_change_clears_asset(self, orchestrator):
        select_pair(orchestrator)
        orchestrator.select_source_chain("ethereum_sepolia")

        assert orchestrator.state.source_asset is None
        assert orchestrator.state.destination_asset is not None

    @pytest.mark.asyncio
    async def test_asset_from_other_chain_rejected(self, orchestrator, catalog):
        orchestrator.select_source_chain("bitcoin_testnet")
        wbtc = catalog.find_asset("ethereum_sepolia", WBTC_ADDRESS)

        state = orchestrator.select_source_asset(wbtc)

        assert state.source_asset is None

    @pytest.mark.asyncio
    async def test_disabled_asset_rejected(self, orchestrator, catalog):
        orchestrator.select_destination_chain("ethereum_sepolia")
        usdc = catalog.get_chain("ethereum_sepolia").asset_config[1]
        assert usdc.disabled

        orchestrator.select_destination_asset(usdc)

        assert orchestrator.state.destination_asset is None

    @pytest.mark.asyncio
    async def test_rejected_asset_keeps_quote(self, orchestrator, catalog):
        select_pair(orchestrator)
        await orchestrator.request_quote()
        wbtc = catalog.find_asset("ethereum_sepolia", WBTC_ADDRESS)

        orchestrator.select_source_asset(wbtc)

        assert orchestrator.state.quote is not None

    @pytest.mark.asyncio
    async def test_address_preserved_across_chain_toggle(self, orchestrator):
        orchestrator.select_destination_chain("bitcoin_testnet")
        assert orchestrator.requires_destination_address
        orchestrator.set_destination_address("tb1qreceiver")

        orchestrator.select_destination_chain("ethereum_sepolia")
        assert not orchestrator.requires_destination_address
        orchestrator.select_destination_chain("bitcoin_testnet")

        assert orchestrator.state.destination_address == "tb1qreceiver"


class TestRequestQuote:
    """Tests for request_quote."""

    @pytest.mark.asyncio
    async def test_missing_selection(self, orchestrator, sdk):
        orchestrator.select_source_chain("bitcoin_testnet")
        orchestrator.select_source_asset_by_address("primary")

        result = await orchestrator.request_quote()

        assert result.success is False
        assert result.error_kind == ErrorKind.MISSING_SELECTION
        assert orchestrator.notifications[-1].message == "Please select both from and to assets"
        sdk.get_quote.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_amount_blocks_call(self, orchestrator, sdk):
        select_pair(orchestrator, amount="abc")

        result = await orchestrator.request_quote()

        assert result.error_kind == ErrorKind.INVALID_AMOUNT
        sdk.get_quote.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_request_shape(self, orchestrator, sdk):
        select_pair(orchestrator)

        await orchestrator.request_quote()

        request = sdk.get_quote.await_args.args[0]
        assert request.amount == 50000
        assert request.is_exact_out is False
        assert request.from_asset.chain == "bitcoin_testnet"
        assert request.from_asset.symbol == "BTC"
        assert request.to_asset.chain == "ethereum_sepolia"
        assert request.to_asset.token_address == WBTC_ADDRESS
        assert request.to_asset.atomic_swap_address == "0xd1E0Ba2b165726b3a6051b765d4564d030FDcf50"

    @pytest.mark.asyncio
    async def test_stores_first_quote(self, orchestrator):
        select_pair(orchestrator)

        result = await orchestrator.request_quote()

        assert result.success is True
        assert orchestrator.state.quote == Quote(strategy_id="strat_a", quote_amount="49850")
        assert orchestrator.state.loading is False

    @pytest.mark.asyncio
    async def test_loading_during_call(self, orchestrator, sdk):
        seen = []

        async def fake_quote(request):
            seen.append(orchestrator.state.loading)
            return SdkResult.success({"quotes": {"s": "1"}})

        sdk.get_quote = AsyncMock(side_effect=fake_quote)
        select_pair(orchestrator)

        await orchestrator.request_quote()

        assert seen == [True]
        assert orchestrator.state.loading is False

    @pytest.mark.asyncio
    async def test_remote_rejected(self, orchestrator, sdk):
        sdk.get_quote = AsyncMock(return_value=SdkResult.failure("Amount below minimum"))
        select_pair(orchestrator)

        result = await orchestrator.request_quote()

        assert result.error_kind == ErrorKind.REMOTE_REJECTED
        assert result.message == "Amount below minimum"
        assert orchestrator.state.quote is None
        assert orchestrator.notifications[-1].level == NotificationLevel.ERROR

    @pytest.mark.asyncio
    async def test_empty_quotes_rejected(self, orchestrator, sdk):
        sdk.get_quote = AsyncMock(return_value=SdkResult.success({"quotes": {}}))
        select_pair(orchestrator)

        result = await orchestrator.request_quote()

        assert result.error_kind == ErrorKind.REMOTE_REJECTED
        assert orchestrator.state.quote is None

    @pytest.mark.asyncio
    async def test_transport_failure(self, orchestrator, sdk):
        sdk.get_quote = AsyncMock(side_effect=ConnectionError("reset"))
        select_pair(orchestrator)

        result = await orchestrator.request_quote()

        assert result.error_kind == ErrorKind.TRANSPORT_FAILURE
        assert result.message == "Error getting quote"
        assert orchestrator.state.loading is False
        assert orchestrator.state.quote is None

    @pytest.mark.asyncio
    async def test_late_response_for_old_selection_discarded(self, orchestrator, sdk):
        async def fake_quote(request):
            # User edits the amount while the request is in flight
            orchestrator.set_amount("0.002")
            return SdkResult.success({"quotes": {"old": "1"}})

        sdk.get_quote = AsyncMock(side_effect=fake_quote)
        select_pair(orchestrator)

        result = await orchestrator.request_quote()

        assert result.stale is True
        assert orchestrator.state.quote is None
        assert orchestrator.state.amount == "0.002"
        assert orchestrator.notifications == []

    @pytest.mark.asyncio
    async def test_latest_request_wins(self, orchestrator, sdk):
        release = asyncio.Event()
        calls = []

        async def fake_quote(request):
            calls.append(request)
            if len(calls) == 1:
                await release.wait()
                return SdkResult.success({"quotes": {"first": "1"}})
            return SdkResult.success({"quotes": {"second": "2"}})

        sdk.get_quote = AsyncMock(side_effect=fake_quote)
        select_pair(orchestrator)

        first = asyncio.create_task(orchestrator.request_quote())
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        second = await orchestrator.request_quote()
        release.set()
        first_result = await first

        assert second.quote.strategy_id == "second"
        assert first_result.stale is True
        assert orchestrator.state.quote.strategy_id == "second"


class TestQuoteStaleness:
    """A quote never survives a change of chain, asset or amount."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "mutate",
        [
            lambda o: o.select_source_chain("bitcoin_testnet"),
            lambda o: o.select_destination_chain("ethereum_sepolia"),
            lambda o: o.select_source_asset_by_address("primary"),
            lambda o: o.select_destination_asset_by_address(WBTC_ADDRESS),
            lambda o: o.set_amount("0.0006"),
        ],
    )
    async def test_mutation_blocks_submit(self, orchestrator, sdk, mutate):
        select_pair(orchestrator)
        await orchestrator.request_quote()
        assert orchestrator.state.quote is not None

        mutate(orchestrator)
        assert orchestrator.state.quote is None

        result = await orchestrator.submit_swap()

        assert result.error_kind == ErrorKind.NOT_READY
        sdk.swap_and_initiate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_address_edit_keeps_quote(self, orchestrator):
        select_pair(orchestrator)
        await orchestrator.request_quote()

        orchestrator.set_destination_address("tb1qnew")

        assert orchestrator.state.quote is not None


class TestSubmitSwap:
    """Tests for submit_swap."""

    @pytest.mark.asyncio
    async def test_requires_quote(self, orchestrator, sdk):
        select_pair(orchestrator)

        result = await orchestrator.submit_swap()

        assert result.success is False
        assert result.error_kind == ErrorKind.NOT_READY
        assert orchestrator.notifications[-1].message == "Please get a quote first"
        sdk.swap_and_initiate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_requires_wallet(self, orchestrator, sdk):
        select_pair(orchestrator)
        await orchestrator.request_quote()
        orchestrator.set_wallet(WalletConnection.disconnected())

        result = await orchestrator.submit_swap()

        assert result.error_kind == ErrorKind.WALLET_NOT_CONNECTED
        assert orchestrator.state.quote is not None
        sdk.swap_and_initiate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_success_clears_quote(self, orchestrator, sdk):
        select_pair(orchestrator)
        orchestrator.set_destination_address("tb1qreceiver")
        await orchestrator.request_quote()

        result = await orchestrator.submit_swap()

        assert result.success is True
        assert result.order_id == "order-123"
        assert orchestrator.state.quote is None
        assert orchestrator.state.loading is False
        assert orchestrator.notifications[-1].level == NotificationLevel.SUCCESS
        assert "order-123" in orchestrator.notifications[-1].message

        request = sdk.swap_and_initiate.await_args.args[0]
        assert request.send_amount == "50000"
        assert request.receive_amount == "49850"
        assert request.additional_data.strategy_id == "strat_a"
        assert request.additional_data.btc_address == "tb1qreceiver"

    @pytest.mark.asyncio
    async def test_rejected_keeps_quote(self, orchestrator, sdk):
        sdk.swap_and_initiate = AsyncMock(return_value=SdkResult.failure("Insufficient liquidity"))
        select_pair(orchestrator)
        await orchestrator.request_quote()
        quote = orchestrator.state.quote

        result = await orchestrator.submit_swap()

        assert result.error_kind == ErrorKind.REMOTE_REJECTED
        assert result.message == "Insufficient liquidity"
        assert orchestrator.state.quote == quote

    @pytest.mark.asyncio
    async def test_transport_failure_keeps_quote(self, orchestrator, sdk):
        sdk.swap_and_initiate = AsyncMock(side_effect=TimeoutError())
        select_pair(orchestrator)
        await orchestrator.request_quote()
        quote = orchestrator.state.quote

        result = await orchestrator.submit_swap()

        assert result.error_kind == ErrorKind.TRANSPORT_FAILURE
        assert result.message == "Error executing swap"
        assert orchestrator.state.quote == quote
        assert orchestrator.state.loading is False

    @pytest.mark.asyncio
    async def test_uses_current_amount(self, orchestrator, sdk):
        select_pair(orchestrator)
        await orchestrator.request_quote()
        # Amount changed without going through set_amount
        orchestrator.state = orchestrator.state.model_copy(update={"amount": "0.001"})

        await orchestrator.submit_swap()

        request = sdk.swap_and_initiate.await_args.args[0]
        assert request.send_amount == "100000"

    @pytest.mark.asyncio
    async def test_order_id_fallback(self, orchestrator, sdk):
        sdk.swap_and_initiate = AsyncMock(return_value=SdkResult.success({"order_id": "fallback-1"}))
        select_pair(orchestrator)
        await orchestrator.request_quote()

        result = await orchestrator.submit_swap()

        assert result.order_id == "fallback-1"

    @pytest.mark.asyncio
    async def test_notify_callback(self, sdk, catalog):
        received = []
        orchestrator = SwapOrchestrator(sdk=sdk, catalog=catalog, notify=received.append)

        await orchestrator.submit_swap()

        assert len(received) == 1
        assert received[0].level == NotificationLevel.ERROR
