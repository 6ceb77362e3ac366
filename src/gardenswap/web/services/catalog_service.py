"""Chain/asset catalog loader.

Loads the supported chains once per visit and keeps only those usable in
the configured network category.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from gardenswap.clients.garden_api import GardenApiClient
from gardenswap.config import get_settings
from gardenswap.errors import GardenSwapError
from gardenswap.web.contracts.assets import (
    AssetConfig,
    AssetListResponse,
    ChainInfo,
    ChainListResponse,
    ChainOption,
)

logger = logging.getLogger(__name__)


def requires_destination_address(chain_id: str) -> bool:
    """Whether the destination chain needs a receiving address input.

    Bitcoin-family chains have no connected wallet to receive on.
    """
    return "bitcoin" in (chain_id or "").lower()


def filter_chains(raw: dict[str, Any], network_type: str) -> dict[str, ChainInfo]:
    """Keep enabled chains of ``network_type`` from a raw ``/info/assets`` payload."""
    chains: dict[str, ChainInfo] = {}
    for key, value in raw.items():
        if not isinstance(value, dict):
            logger.warning("Skipping catalog entry %s: not an object", key)
            continue
        try:
            chain = ChainInfo.model_validate(value)
        except ValidationError as e:
            logger.warning("Skipping catalog entry %s: %s", key, e)
            continue
        if chain.network_type == network_type and not chain.disabled:
            chains[key] = chain
    return chains


class CatalogService:
    """Catalog of selectable chains and assets.

    Assets are not pre-filtered: ``selectable_assets`` re-applies the
    enabled filter on every read.
    """

    def __init__(
        self,
        client: Optional[GardenApiClient] = None,
        network_type: Optional[str] = None,
    ):
        self._client = client or GardenApiClient()
        self.network_type = network_type or get_settings().network_type
        self.chains: dict[str, ChainInfo] = {}
        self.loaded = False

    async def load(self) -> dict[str, ChainInfo]:
        """Fetch the catalog and publish the filtered mapping.

        On failure the catalog is empty and stays unloaded, so the next
        visit (``ensure_loaded``) fetches again. There is no retry within
        one call.
        """
        try:
            raw = await self._client.get_assets()
        except GardenSwapError as e:
            logger.error(f"Error fetching chain data: {e}")
            self.chains = {}
            self.loaded = False
            return self.chains

        self.chains = filter_chains(raw, self.network_type)
        self.loaded = True
        logger.info(
            "Loaded %d %s chains (of %d in catalog)",
            len(self.chains), self.network_type, len(raw),
        )
        return self.chains

    async def ensure_loaded(self) -> dict[str, ChainInfo]:
        """Load the catalog unless a previous fetch succeeded."""
        if not self.loaded:
            await self.load()
        return self.chains

    def get_chain(self, chain_id: str) -> Optional[ChainInfo]:
        return self.chains.get(chain_id)

    def selectable_assets(self, chain_id: str) -> list[AssetConfig]:
        """Enabled assets of a chain (empty for unknown chains)."""
        chain = self.chains.get(chain_id)
        if chain is None:
            return []
        return [asset for asset in chain.asset_config if not asset.disabled]

    def find_asset(self, chain_id: str, token_address: str) -> Optional[AssetConfig]:
        """Resolve a selectable asset by its token address."""
        for asset in self.selectable_assets(chain_id):
            if asset.token_address == token_address:
                return asset
        return None

    def is_selectable(self, chain_id: str, asset: AssetConfig) -> bool:
        return asset in self.selectable_assets(chain_id)

    def chain_options(self) -> list[ChainOption]:
        return [
            ChainOption(
                id=chain_id,
                name=chain.name,
                requires_destination_address=requires_destination_address(chain_id),
            )
            for chain_id, chain in self.chains.items()
        ]

    def get_chain_list(self) -> ChainListResponse:
        options = self.chain_options()
        return ChainListResponse(success=True, chains=options, total=len(options))

    def get_asset_list(self, chain_id: str) -> AssetListResponse:
        assets = self.selectable_assets(chain_id)
        return AssetListResponse(success=True, chain=chain_id, assets=assets, total=len(assets))
