"""Chain and token information API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from ammswap.contracts.chains import ChainInfo, ChainListResponse, TokenListResponse
from ammswap.controllers.dependencies import get_chain_service
from ammswap.services.chain_service import ChainService

router = APIRouter(prefix="/chains", tags=["chains"])


@router.get("/", response_model=ChainListResponse)
async def get_chains(service: ChainService = Depends(get_chain_service)) -> ChainListResponse:
    """Get list of supported chains.

    Returns router/quoter addresses, fee tiers and explorer URLs per chain.
    """
    return service.get_supported_chains()


@router.get("/{chain}", response_model=ChainInfo)
async def get_chain(chain: str, service: ChainService = Depends(get_chain_service)) -> ChainInfo:
    """Get information about a specific chain.

    Args:
        chain: Chain key (ethereum, polygon, etc.) or chain id
    """
    info = service.get_chain(chain)
    if not info:
        raise HTTPException(status_code=404, detail=f"Chain not found: {chain}")
    return info


@router.get("/{chain}/tokens", response_model=TokenListResponse)
async def get_chain_tokens(
    chain: str, service: ChainService = Depends(get_chain_service)
) -> TokenListResponse:
    """Get the tokens that can be quoted on a chain."""
    return service.get_supported_tokens(chain)
