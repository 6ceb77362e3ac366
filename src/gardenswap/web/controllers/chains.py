"""Chain and asset catalog endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from gardenswap.web.contracts.assets import AssetListResponse, ChainListResponse
from gardenswap.web.dependencies import get_catalog_service
from gardenswap.web.services.catalog_service import CatalogService

router = APIRouter(prefix="/chains", tags=["chains"])


@router.get("/", response_model=ChainListResponse)
async def get_chains(catalog: CatalogService = Depends(get_catalog_service)) -> ChainListResponse:
    """Get the selectable chains for the configured network."""
    await catalog.ensure_loaded()
    return catalog.get_chain_list()


@router.get("/{chain_id}/assets", response_model=AssetListResponse)
async def get_chain_assets(
    chain_id: str,
    catalog: CatalogService = Depends(get_catalog_service),
) -> AssetListResponse:
    """Get the enabled assets of one chain.

    Args:
        chain_id: Catalog key of the chain
    """
    await catalog.ensure_loaded()
    if catalog.get_chain(chain_id) is None:
        raise HTTPException(status_code=404, detail=f"Chain not found: {chain_id}")
    return catalog.get_asset_list(chain_id)
