"""Pytest configuration and fixtures."""

import copy
import os
from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"
os.environ["GARDEN_API_URL"] = "http://garden.test"
os.environ["NETWORK_TYPE"] = "testnet"
os.environ["ORDER_EXPLORER_URL"] = "https://explorer.garden.test"

from gardenswap.clients.garden_api import GardenApiClient
from gardenswap.config import get_settings
from gardenswap.sdk.base import SwapSDK
from gardenswap.wallet import WalletConnection
from gardenswap.web.contracts.quotes import SdkResult
from gardenswap.web.services.catalog_service import CatalogService
from gardenswap.web.services.swap_service import SwapOrchestrator

WALLET_ADDRESS = "0x52FE8afbbB800a33edcbDB1ea87be2547EB30000"
WBTC_ADDRESS = "0x29f2D40B0605204364af54EC677bD022dA425d03"

ASSETS_PAYLOAD = {
    "bitcoin_testnet": {
        "chainId": "bitcoin_testnet",
        "networkLogo": "https://garden.test/bitcoin.svg",
        "name": "Bitcoin Testnet",
        "networkType": "testnet",
        "identifier": "bitcoin_testnet",
        "disabled": False,
        "assetConfig": [
            {
                "name": "Bitcoin",
                "decimals": 8,
                "symbol": "BTC",
                "logo": "https://garden.test/btc.svg",
                "tokenAddress": "primary",
                "atomicSwapAddress": "primary",
                "min_amount": "50000",
                "max_amount": "1000000",
                "disabled": False,
            }
        ],
    },
    "ethereum_sepolia": {
        "chainId": "11155111",
        "networkLogo": "https://garden.test/ethereum.svg",
        "name": "Ethereum Sepolia",
        "networkType": "testnet",
        "identifier": "ethereum_sepolia",
        "disabled": False,
        "assetConfig": [
            {
                "name": "Wrapped Bitcoin",
                "decimals": 8,
                "symbol": "WBTC",
                "logo": "https://garden.test/wbtc.svg",
                "tokenAddress": WBTC_ADDRESS,
                "atomicSwapAddress": "0xd1E0Ba2b165726b3a6051b765d4564d030FDcf50",
                "min_amount": "50000",
                "max_amount": "1000000",
                "disabled": False,
            },
            {
                "name": "USD Coin",
                "decimals": 6,
                "symbol": "USDC",
                "logo": "https://garden.test/usdc.svg",
                "tokenAddress": "0x1c7D4B196Cb0C7B01d743Fbc6116a902379C7238",
                "atomicSwapAddress": "0x730Be401ef981D199a0560C87DfdDaFd3EC1C493",
                "min_amount": "1000000",
                "max_amount": "100000000",
                "disabled": True,
            },
        ],
    },
    "arbitrum_sepolia": {
        "chainId": "421614",
        "networkLogo": "https://garden.test/arbitrum.svg",
        "name": "Arbitrum Sepolia",
        "networkType": "testnet",
        "identifier": "arbitrum_sepolia",
        "disabled": True,
        "assetConfig": [],
    },
    "ethereum": {
        "chainId": "1",
        "networkLogo": "https://garden.test/ethereum.svg",
        "name": "Ethereum",
        "networkType": "mainnet",
        "identifier": "ethereum",
        "disabled": False,
        "assetConfig": [],
    },
}


@pytest.fixture(autouse=True)
def reset_settings():
    """Re-read settings from the test environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def assets_payload() -> dict:
    return copy.deepcopy(ASSETS_PAYLOAD)


@pytest.fixture
def api_client_factory() -> Callable[[Callable[[httpx.Request], httpx.Response]], GardenApiClient]:
    """Build a GardenApiClient whose HTTP traffic goes to ``handler``."""

    def factory(handler):
        transport = httpx.MockTransport(handler)
        return GardenApiClient(
            base_url="http://garden.test",
            http_client=httpx.AsyncClient(transport=transport),
        )

    return factory


@pytest_asyncio.fixture
async def catalog(assets_payload) -> CatalogService:
    """Catalog loaded from ASSETS_PAYLOAD."""
    client = MagicMock(spec=GardenApiClient)
    client.get_assets = AsyncMock(return_value=assets_payload)
    service = CatalogService(client=client, network_type="testnet")
    await service.load()
    return service


@pytest.fixture
def sdk() -> MagicMock:
    """Swap SDK double with two strategies and a successful order."""
    mock_sdk = MagicMock(spec=SwapSDK)
    mock_sdk.get_quote = AsyncMock(
        return_value=SdkResult.success({"quotes": {"strat_a": "49850", "strat_b": "49750"}})
    )
    mock_sdk.swap_and_initiate = AsyncMock(
        return_value=SdkResult.success({"create_order": {"create_id": "order-123"}})
    )
    return mock_sdk


@pytest.fixture
def orchestrator(sdk, catalog) -> SwapOrchestrator:
    return SwapOrchestrator(
        sdk=sdk,
        catalog=catalog,
        wallet=WalletConnection(address=WALLET_ADDRESS),
    )
