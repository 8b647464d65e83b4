"""One-shot swap preparation endpoint."""

import logging

from fastapi import APIRouter, Depends

from ammswap.contracts.swaps import SwapPlanRequest, SwapPlanResponse
from ammswap.controllers.dependencies import get_swap_service
from ammswap.services.swap_service import SwapService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/swaps", tags=["swaps"])


@router.post("/prepare", response_model=SwapPlanResponse)
async def prepare_swap(
    request: SwapPlanRequest,
    service: SwapService = Depends(get_swap_service),
) -> SwapPlanResponse:
    """Quote, check allowance and build every transaction the wallet needs.

    If ``approval_transaction`` is returned, it must be mined before the
    swap transaction is broadcast.
    """
    owner = request.owner or request.recipient
    quote = await service.get_quote(
        request.chain,
        request.token_in,
        request.token_out,
        request.amount,
        request.slippage,
    )
    allowance = await service.check_allowance(
        request.chain, request.token_in, owner, request.amount
    )

    approval = None
    if allowance.needs_approval:
        approval = service.build_approval_transaction(request.chain, request.token_in)
        logger.info(f"Swap plan for {owner} on {request.chain} requires approval of {request.token_in}")

    return SwapPlanResponse(
        success=True,
        quote=quote,
        allowance=allowance,
        approval_transaction=approval,
        swap_transaction=service.build_swap_transaction(request, quote),
    )
