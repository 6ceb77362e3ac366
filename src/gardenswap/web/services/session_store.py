"""In-memory registry of swap form sessions."""

import logging
import time
import uuid
from typing import Callable, Optional

from gardenswap.config import get_settings
from gardenswap.sdk.base import SwapSDK
from gardenswap.wallet import WalletConnection
from gardenswap.web.services.catalog_service import CatalogService
from gardenswap.web.services.swap_service import SwapOrchestrator

logger = logging.getLogger(__name__)


class SwapSessionStore:
    """Holds one ``SwapOrchestrator`` per browser session.

    Nothing is persisted; sessions are lost on restart. A session not
    touched for ``idle_seconds`` is dropped on the next create or lookup.
    """

    def __init__(
        self,
        sdk: SwapSDK,
        catalog: CatalogService,
        idle_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.sdk = sdk
        self.catalog = catalog
        self.idle_seconds = idle_seconds or get_settings().session_idle_seconds
        self._clock = clock
        self._sessions: dict[str, SwapOrchestrator] = {}
        self._last_seen: dict[str, float] = {}

    def _expire_idle(self) -> None:
        cutoff = self._clock() - self.idle_seconds
        expired = [sid for sid, seen in self._last_seen.items() if seen < cutoff]
        for session_id in expired:
            self.remove(session_id)
        if expired:
            logger.info(f"Expired {len(expired)} idle swap sessions")

    def create(self, wallet_address: Optional[str] = None) -> tuple[str, SwapOrchestrator]:
        self._expire_idle()
        session_id = uuid.uuid4().hex
        orchestrator = SwapOrchestrator(
            sdk=self.sdk,
            catalog=self.catalog,
            wallet=WalletConnection(address=wallet_address),
        )
        self._sessions[session_id] = orchestrator
        self._last_seen[session_id] = self._clock()
        logger.debug(f"Created swap session {session_id}")
        return session_id, orchestrator

    def get(self, session_id: str) -> Optional[SwapOrchestrator]:
        self._expire_idle()
        orchestrator = self._sessions.get(session_id)
        if orchestrator is not None:
            self._last_seen[session_id] = self._clock()
        return orchestrator

    def remove(self, session_id: str) -> bool:
        self._last_seen.pop(session_id, None)
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
