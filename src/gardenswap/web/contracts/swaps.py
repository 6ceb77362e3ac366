"""Swap form state and action result contracts."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from gardenswap.errors import ErrorKind
from gardenswap.web.contracts.assets import AssetConfig
from gardenswap.web.contracts.quotes import Quote


class SwapFormState(BaseModel):
    """Session state of the swap form.

    Immutable; transitions return a new instance. ``quote`` is only
    trustworthy for the chain/asset/amount selection it was fetched for,
    so every transition touching those fields clears it.
    """

    model_config = ConfigDict(frozen=True)

    source_chain: str = ""
    destination_chain: str = ""
    source_asset: Optional[AssetConfig] = None
    destination_asset: Optional[AssetConfig] = None
    amount: str = ""
    destination_address: str = ""
    quote: Optional[Quote] = None
    loading: bool = False


class NotificationLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """User-facing message raised by a swap action."""

    level: NotificationLevel
    message: str


class ActionResult(BaseModel):
    """Outcome of ``request_quote`` or ``submit_swap``."""

    success: bool
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None
    quote: Optional[Quote] = None
    order_id: Optional[str] = None
    stale: bool = Field(
        default=False,
        description="Response arrived after the selection changed and was discarded",
    )


class SelectChainRequest(BaseModel):
    chain_id: str


class SelectAssetRequest(BaseModel):
    token_address: str


class SetAmountRequest(BaseModel):
    amount: str


class SetAddressRequest(BaseModel):
    address: str


class WalletRequest(BaseModel):
    address: Optional[str] = None


class SwapSessionResponse(BaseModel):
    """Current state of a swap session."""

    session_id: str
    state: SwapFormState
    wallet_address: Optional[str] = None
    wallet_display: str = Field(default="", description="Shortened address for the wallet banner")
    requires_destination_address: bool = False
    notifications: list[Notification] = Field(default_factory=list)
    last_result: Optional[ActionResult] = None
