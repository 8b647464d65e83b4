"""Transaction API endpoints for non-custodial operations.

These endpoints prepare unsigned transactions for client-side signing.
NO signing or broadcasting happens server-side.
"""

from fastapi import APIRouter, Depends

from ammswap.contracts.swaps import SwapTransactionRequest
from ammswap.contracts.transactions import ApprovalRequest, UnsignedTransaction
from ammswap.controllers.dependencies import get_swap_service
from ammswap.services.swap_service import SwapService

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post("/approve", response_model=UnsignedTransaction)
async def build_approval(
    request: ApprovalRequest,
    service: SwapService = Depends(get_swap_service),
) -> UnsignedTransaction:
    """Build an unlimited router approval for a token.

    Returns:
        Unsigned transaction for client to sign
    """
    return service.build_approval_transaction(request.chain, request.token)


@router.post("/swap", response_model=UnsignedTransaction)
async def build_swap(
    request: SwapTransactionRequest,
    service: SwapService = Depends(get_swap_service),
) -> UnsignedTransaction:
    """Build the swap transaction for a previously fetched quote.

    The client must:
    1. Mine any required approval first
    2. Sign the returned transaction with their private key
    3. Broadcast to the network themselves
    """
    return service.build_swap_transaction(request.request, request.quote)
