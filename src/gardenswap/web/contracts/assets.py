"""Chain and asset catalog contracts.

Field aliases follow the camelCase shape of ``GET /info/assets``.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AssetConfig(BaseModel):
    """One token on a chain."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    symbol: str = Field(..., description="Asset symbol (BTC, WBTC, etc.)")
    name: str = Field(default="", description="Full asset name")
    decimals: int = Field(..., ge=0, description="Token decimals")
    logo: Optional[str] = Field(None, description="URL to asset logo")
    token_address: str = Field(
        default="",
        alias="tokenAddress",
        description="Token contract address (empty/sentinel for native assets)",
    )
    atomic_swap_address: str = Field(
        default="",
        alias="atomicSwapAddress",
        description="Settlement contract address",
    )
    min_amount: Optional[str] = Field(None, description="Minimum swap amount")
    max_amount: Optional[str] = Field(None, description="Maximum swap amount")
    disabled: bool = Field(default=False, description="Whether the asset is disabled")


class ChainInfo(BaseModel):
    """One supported network from the catalog."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    chain_id: str = Field(..., alias="chainId", description="Chain identifier")
    name: str = Field(..., description="Chain display name")
    network_type: str = Field(..., alias="networkType", description="testnet or mainnet")
    network_logo: Optional[str] = Field(None, alias="networkLogo")
    identifier: Optional[str] = Field(None, description="Chain key used by the SDK")
    asset_config: list[AssetConfig] = Field(default_factory=list, alias="assetConfig")
    disabled: bool = Field(default=False, description="Whether the chain is disabled")


class ChainOption(BaseModel):
    """A selectable chain entry for select inputs."""

    id: str
    name: str
    requires_destination_address: bool = False


class ChainListResponse(BaseModel):
    """Response containing the selectable chains."""

    success: bool = True
    chains: list[ChainOption] = Field(default_factory=list)
    total: int = Field(default=0)


class AssetListResponse(BaseModel):
    """Response containing the selectable assets of one chain."""

    success: bool = True
    chain: str
    assets: list[AssetConfig] = Field(default_factory=list)
    total: int = Field(default=0, description="Total number of assets")
