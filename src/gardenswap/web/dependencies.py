"""Shared service instances for the HTTP controllers.

Tests replace these through ``app.dependency_overrides``.
"""

from functools import lru_cache

from gardenswap.clients.garden_api import GardenApiClient
from gardenswap.config import get_settings
from gardenswap.sdk import SwapSDK, create_sdk
from gardenswap.web.services.catalog_service import CatalogService
from gardenswap.web.services.history_service import OrderHistoryService
from gardenswap.web.services.session_store import SwapSessionStore


@lru_cache
def get_api_client() -> GardenApiClient:
    return GardenApiClient()


@lru_cache
def get_catalog_service() -> CatalogService:
    return CatalogService(client=get_api_client())


@lru_cache
def get_swap_sdk() -> SwapSDK:
    return create_sdk(get_settings().sdk_mode)


@lru_cache
def get_history_service() -> OrderHistoryService:
    return OrderHistoryService(client=get_api_client())


@lru_cache
def get_session_store() -> SwapSessionStore:
    return SwapSessionStore(sdk=get_swap_sdk(), catalog=get_catalog_service())
