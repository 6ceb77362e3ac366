"""Swap SDK interface and backends."""

from gardenswap.sdk.base import SwapSDK
from gardenswap.sdk.dry_run import DryRunSDK


def create_sdk(mode: str = "dry_run") -> SwapSDK:
    """Create the swap SDK backend for a configured mode."""
    if mode == "dry_run":
        return DryRunSDK()
    raise ValueError(f"Unknown SDK mode: {mode}")


__all__ = ["SwapSDK", "DryRunSDK", "create_sdk"]
