"""Swap form endpoints.

Each session wraps one ``SwapOrchestrator``; every transition endpoint
returns the full session state, including notifications raised since the
previous call.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from gardenswap.wallet import WalletConnection
from gardenswap.web.contracts.swaps import (
    ActionResult,
    SelectAssetRequest,
    SelectChainRequest,
    SetAddressRequest,
    SetAmountRequest,
    SwapSessionResponse,
    WalletRequest,
)
from gardenswap.web.dependencies import get_session_store
from gardenswap.web.services.display import short_address
from gardenswap.web.services.session_store import SwapSessionStore
from gardenswap.web.services.swap_service import SwapOrchestrator

router = APIRouter(prefix="/swap/sessions", tags=["swap"])


def _get_session(store: SwapSessionStore, session_id: str) -> SwapOrchestrator:
    orchestrator = store.get(session_id)
    if orchestrator is None:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return orchestrator


def _response(
    session_id: str,
    orchestrator: SwapOrchestrator,
    result: Optional[ActionResult] = None,
) -> SwapSessionResponse:
    notifications = list(orchestrator.notifications)
    orchestrator.notifications.clear()
    return SwapSessionResponse(
        session_id=session_id,
        state=orchestrator.state,
        wallet_address=orchestrator.wallet.address,
        wallet_display=short_address(orchestrator.wallet.address),
        requires_destination_address=orchestrator.requires_destination_address,
        notifications=notifications,
        last_result=result,
    )


async def _require_chain(orchestrator: SwapOrchestrator, chain_id: str) -> None:
    await orchestrator.catalog.ensure_loaded()
    if orchestrator.catalog.get_chain(chain_id) is None:
        raise HTTPException(status_code=404, detail=f"Chain not found: {chain_id}")


@router.post("/", response_model=SwapSessionResponse)
async def create_session(
    request: Optional[WalletRequest] = None,
    store: SwapSessionStore = Depends(get_session_store),
) -> SwapSessionResponse:
    """Start a new swap form."""
    await store.catalog.ensure_loaded()
    session_id, orchestrator = store.create(request.address if request else None)
    return _response(session_id, orchestrator)


@router.get("/{session_id}", response_model=SwapSessionResponse)
async def get_session(
    session_id: str, store: SwapSessionStore = Depends(get_session_store)
) -> SwapSessionResponse:
    return _response(session_id, _get_session(store, session_id))


@router.delete("/{session_id}")
async def delete_session(session_id: str, store: SwapSessionStore = Depends(get_session_store)) -> dict:
    if not store.remove(session_id):
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return {"success": True}


@router.post("/{session_id}/wallet", response_model=SwapSessionResponse)
async def set_wallet(
    session_id: str,
    request: WalletRequest,
    store: SwapSessionStore = Depends(get_session_store),
) -> SwapSessionResponse:
    """Record the connected wallet address (null to disconnect)."""
    orchestrator = _get_session(store, session_id)
    orchestrator.set_wallet(WalletConnection(address=request.address))
    return _response(session_id, orchestrator)


@router.post("/{session_id}/source-chain", response_model=SwapSessionResponse)
async def select_source_chain(
    session_id: str,
    request: SelectChainRequest,
    store: SwapSessionStore = Depends(get_session_store),
) -> SwapSessionResponse:
    orchestrator = _get_session(store, session_id)
    await _require_chain(orchestrator, request.chain_id)
    orchestrator.select_source_chain(request.chain_id)
    return _response(session_id, orchestrator)


@router.post("/{session_id}/source-asset", response_model=SwapSessionResponse)
async def select_source_asset(
    session_id: str,
    request: SelectAssetRequest,
    store: SwapSessionStore = Depends(get_session_store),
) -> SwapSessionResponse:
    orchestrator = _get_session(store, session_id)
    orchestrator.select_source_asset_by_address(request.token_address)
    return _response(session_id, orchestrator)


@router.post("/{session_id}/destination-chain", response_model=SwapSessionResponse)
async def select_destination_chain(
    session_id: str,
    request: SelectChainRequest,
    store: SwapSessionStore = Depends(get_session_store),
) -> SwapSessionResponse:
    orchestrator = _get_session(store, session_id)
    await _require_chain(orchestrator, request.chain_id)
    orchestrator.select_destination_chain(request.chain_id)
    return _response(session_id, orchestrator)


@router.post("/{session_id}/destination-asset", response_model=SwapSessionResponse)
async def select_destination_asset(
    session_id: str,
    request: SelectAssetRequest,
    store: SwapSessionStore = Depends(get_session_store),
) -> SwapSessionResponse:
    orchestrator = _get_session(store, session_id)
    orchestrator.select_destination_asset_by_address(request.token_address)
    return _response(session_id, orchestrator)


@router.post("/{session_id}/amount", response_model=SwapSessionResponse)
async def set_amount(
    session_id: str,
    request: SetAmountRequest,
    store: SwapSessionStore = Depends(get_session_store),
) -> SwapSessionResponse:
    orchestrator = _get_session(store, session_id)
    orchestrator.set_amount(request.amount)
    return _response(session_id, orchestrator)


@router.post("/{session_id}/destination-address", response_model=SwapSessionResponse)
async def set_destination_address(
    session_id: str,
    request: SetAddressRequest,
    store: SwapSessionStore = Depends(get_session_store),
) -> SwapSessionResponse:
    orchestrator = _get_session(store, session_id)
    orchestrator.set_destination_address(request.address)
    return _response(session_id, orchestrator)


@router.post("/{session_id}/quote", response_model=SwapSessionResponse)
async def request_quote(
    session_id: str, store: SwapSessionStore = Depends(get_session_store)
) -> SwapSessionResponse:
    """Fetch a quote for the current selection.

    Failures are reported in ``last_result`` and ``notifications``, not as
    HTTP errors.
    """
    orchestrator = _get_session(store, session_id)
    result = await orchestrator.request_quote()
    return _response(session_id, orchestrator, result)


@router.post("/{session_id}/submit", response_model=SwapSessionResponse)
async def submit_swap(
    session_id: str, store: SwapSessionStore = Depends(get_session_store)
) -> SwapSessionResponse:
    """Create and initiate an order for the current quote."""
    orchestrator = _get_session(store, session_id)
    result = await orchestrator.submit_swap()
    return _response(session_id, orchestrator, result)
