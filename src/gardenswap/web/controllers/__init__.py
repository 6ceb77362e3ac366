"""HTTP controllers for the swap and order history screens."""

from gardenswap.web.controllers.chains import router as chains_router
from gardenswap.web.controllers.orders import router as orders_router
from gardenswap.web.controllers.swaps import router as swaps_router

__all__ = [
    "chains_router",
    "orders_router",
    "swaps_router",
]
