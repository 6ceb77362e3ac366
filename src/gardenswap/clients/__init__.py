"""Clients for remote Garden services."""

from gardenswap.clients.garden_api import GardenApiClient

__all__ = ["GardenApiClient"]
