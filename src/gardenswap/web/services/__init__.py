"""Web services behind the swap and order history screens.

These services never hold keys or sign anything: quoting and settlement
go through the swap SDK, history through the read-only REST API.
"""

from gardenswap.web.services.catalog_service import CatalogService
from gardenswap.web.services.history_service import OrderHistoryService, OrderHistoryView
from gardenswap.web.services.session_store import SwapSessionStore
from gardenswap.web.services.swap_service import SwapOrchestrator

__all__ = [
    "CatalogService",
    "OrderHistoryService",
    "OrderHistoryView",
    "SwapOrchestrator",
    "SwapSessionStore",
]
