"""Read-only view of the wallet connection.

The wallet provider owns connecting and signing; this app only reads the
connection status and address.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WalletConnection:
    """Connection status and address of the user's wallet."""

    address: Optional[str] = None

    @property
    def is_connected(self) -> bool:
        return bool(self.address)

    @classmethod
    def disconnected(cls) -> "WalletConnection":
        return cls(address=None)
