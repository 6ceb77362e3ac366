"""Abstract swap SDK interface.

Quoting, order matching and settlement all live behind this interface.
Business failures come back as ``SdkResult(ok=False, ...)``; implementations
may still raise for transport-level failures.
"""

from abc import ABC, abstractmethod

from gardenswap.web.contracts.quotes import QuoteRequest, SdkResult, SwapRequest


class SwapSDK(ABC):
    """Capability interface consumed by the swap orchestrator."""

    @property
    @abstractmethod
    def name(self) -> str:
        """SDK backend identifier."""
        pass

    @abstractmethod
    async def get_quote(self, request: QuoteRequest) -> SdkResult:
        """
        Get quotes for a swap.

        Args:
            request: Source/destination descriptors and base-unit amount

        Returns:
            ok result with ``{"quotes": {strategy_id: amount}}`` or an error
        """
        pass

    @abstractmethod
    async def swap_and_initiate(self, request: SwapRequest) -> SdkResult:
        """
        Create an order for a quoted swap and initiate it.

        Args:
            request: Descriptors, send/receive amounts and additional data

        Returns:
            ok result with ``{"create_order": {"create_id": ...}}`` or an error
        """
        pass
