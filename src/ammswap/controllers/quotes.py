"""Quote API endpoints."""

from fastapi import APIRouter, Depends

from ammswap.contracts.quotes import Quote, QuoteRequest
from ammswap.controllers.dependencies import get_swap_service
from ammswap.services.swap_service import SwapService

router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.post("/", response_model=Quote)
async def get_quote(
    request: QuoteRequest,
    service: SwapService = Depends(get_swap_service),
) -> Quote:
    """Get the best single-pool quote across the chain's fee tiers.

    This is a READ-ONLY operation - no transactions are executed.
    """
    return await service.get_quote(
        request.chain,
        request.token_in,
        request.token_out,
        request.amount,
        request.slippage,
    )
