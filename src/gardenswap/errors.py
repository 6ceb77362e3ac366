"""Error taxonomy for swap and order-history operations.

Services catch these at the point of failure and turn them into result
models; none of them is fatal to the process.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable failure category carried on result models."""

    MISSING_SELECTION = "missing_selection"
    NOT_READY = "not_ready"
    INVALID_AMOUNT = "invalid_amount"
    WALLET_NOT_CONNECTED = "wallet_not_connected"
    REMOTE_REJECTED = "remote_rejected"
    TRANSPORT_FAILURE = "transport_failure"
    MALFORMED_RESPONSE = "malformed_response"


class GardenSwapError(Exception):
    """Base class for all gardenswap errors."""

    kind: ErrorKind

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MissingSelection(GardenSwapError):
    """A required form field (asset, chain) is not selected."""

    kind = ErrorKind.MISSING_SELECTION


class NotReady(MissingSelection):
    """Submit attempted without a current quote."""

    kind = ErrorKind.NOT_READY


class InvalidAmount(GardenSwapError):
    """Amount is not a non-negative base-10 decimal."""

    kind = ErrorKind.INVALID_AMOUNT


class WalletNotConnected(GardenSwapError):
    """Submit attempted without a connected wallet."""

    kind = ErrorKind.WALLET_NOT_CONNECTED


class RemoteRejected(GardenSwapError):
    """The swap SDK answered with ok=false."""

    kind = ErrorKind.REMOTE_REJECTED


class TransportFailure(GardenSwapError):
    """Network or transport level failure talking to a remote service."""

    kind = ErrorKind.TRANSPORT_FAILURE


class MalformedResponse(GardenSwapError):
    """A remote payload is missing its expected shape."""

    kind = ErrorKind.MALFORMED_RESPONSE
